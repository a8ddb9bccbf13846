"""
Error taxonomy shared by storage backends, services and routes
"""


class IncubatorError(Exception):
    """Base class for classified application errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(IncubatorError):
    """Malformed or missing request fields"""

    status_code = 400


class AuthenticationError(IncubatorError):
    """Credentials did not match"""

    status_code = 401


class NotFoundError(IncubatorError):
    """Referenced entity does not exist"""

    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(IncubatorError):
    """A unique field already holds the submitted value"""

    status_code = 409
