# API routes package
from . import accounts, answers, api_configs, categories, ideas, questions

ROUTERS = (
    accounts.router,
    categories.router,
    ideas.router,
    answers.router,
    questions.router,
    api_configs.router,
)

__all__ = ["ROUTERS"]
