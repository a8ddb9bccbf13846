"""
FastAPI dependencies wiring services to the storage held on app.state
"""
from fastapi import Depends, Request

from incubator.config import Settings, get_settings
from incubator.services import (
    AccountService,
    AnswerService,
    ApiConfigService,
    CatalogService,
    EffectivenessScorer,
    IdeaService,
    QuestionSelector,
    VersionManager,
)
from incubator.storage import Storage


def get_storage(request: Request) -> Storage:
    """Storage constructed at startup"""
    return request.app.state.storage


def get_version_manager(storage: Storage = Depends(get_storage)) -> VersionManager:
    return VersionManager(storage)


def get_idea_service(
    storage: Storage = Depends(get_storage),
    version_manager: VersionManager = Depends(get_version_manager),
) -> IdeaService:
    return IdeaService(storage, version_manager)


def get_answer_service(storage: Storage = Depends(get_storage)) -> AnswerService:
    return AnswerService(storage)


def get_question_selector(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> QuestionSelector:
    return QuestionSelector(storage, limit=settings.MAX_SUGGESTED_QUESTIONS)


def get_effectiveness_scorer(storage: Storage = Depends(get_storage)) -> EffectivenessScorer:
    return EffectivenessScorer(storage)


def get_account_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(storage, app_version=settings.DEFAULT_APP_VERSION)


def get_catalog_service(storage: Storage = Depends(get_storage)) -> CatalogService:
    return CatalogService(storage)


def get_api_config_service(storage: Storage = Depends(get_storage)) -> ApiConfigService:
    return ApiConfigService(storage)
