"""
API routes for the question catalog and question feedback
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from incubator.dependencies import get_catalog_service, get_effectiveness_scorer
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger
from incubator.models import Question, QuestionCreate, QuestionFeedback, QuestionFeedbackCreate
from incubator.services import CatalogService, EffectivenessScorer

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=List[Question])
async def list_questions(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    service: CatalogService = Depends(get_catalog_service),
):
    """All questions, or a category's questions plus the generic ones"""
    try:
        return await service.list_questions(category_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching questions: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching questions")


@router.get("/questions/{question_id}", response_model=Question)
async def get_question(question_id: int, service: CatalogService = Depends(get_catalog_service)):
    try:
        return await service.get_question(question_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching question {question_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching question")


@router.post("/questions", response_model=Question, status_code=201)
async def create_question(payload: QuestionCreate, service: CatalogService = Depends(get_catalog_service)):
    try:
        return await service.create_question(payload)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error creating question: {str(e)}")
        raise HTTPException(status_code=500, detail="Error creating question")


@router.post("/question-feedback", response_model=QuestionFeedback, status_code=201)
async def record_feedback(
    payload: QuestionFeedbackCreate,
    scorer: EffectivenessScorer = Depends(get_effectiveness_scorer),
):
    """Record a thumbs up/down and rescore the question"""
    try:
        return await scorer.record_feedback(payload)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error recording feedback for question {payload.question_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error recording feedback")
