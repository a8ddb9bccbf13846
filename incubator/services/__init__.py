# Business logic services package
from .version_manager import VersionManager
from .question_selector import QuestionSelector
from .effectiveness_scorer import EffectivenessScorer, compute_effectiveness
from .idea_service import IdeaService
from .answer_service import AnswerService
from .account_service import AccountService
from .catalog_service import CatalogService
from .api_config_service import ApiConfigService

__all__ = [
    "VersionManager",
    "QuestionSelector",
    "EffectivenessScorer",
    "compute_effectiveness",
    "IdeaService",
    "AnswerService",
    "AccountService",
    "CatalogService",
    "ApiConfigService",
]
