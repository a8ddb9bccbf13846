"""
API routes for answers and manual version snapshots
"""
from fastapi import APIRouter, Depends, HTTPException, Response

from incubator.dependencies import get_answer_service, get_version_manager
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger
from incubator.models import Answer, AnswerCreate, AnswerUpdate, IdeaVersionCreate, IdeaVersionRead
from incubator.services import AnswerService, VersionManager

router = APIRouter(tags=["answers"])


@router.post("/answers", response_model=Answer, status_code=201)
async def save_answer(
    payload: AnswerCreate,
    response: Response,
    service: AnswerService = Depends(get_answer_service),
):
    """Answer a question for an idea; an existing answer to it is overwritten"""
    try:
        answer, created = await service.save_answer(payload)
        if not created:
            response.status_code = 200
        return answer
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error saving answer: {str(e)}")
        raise HTTPException(status_code=500, detail="Error saving answer")


@router.put("/answers/{answer_id}", response_model=Answer)
async def update_answer(
    answer_id: int,
    payload: AnswerUpdate,
    service: AnswerService = Depends(get_answer_service),
):
    try:
        return await service.update_answer(answer_id, payload.text)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error updating answer {answer_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error updating answer")


@router.post("/versions", response_model=IdeaVersionRead, status_code=201)
async def record_version(
    payload: IdeaVersionCreate,
    manager: VersionManager = Depends(get_version_manager),
):
    """Store an explicit snapshot for an idea"""
    try:
        return await manager.record_version(payload)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error recording version: {str(e)}")
        raise HTTPException(status_code=500, detail="Error recording version")
