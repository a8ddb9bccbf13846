"""
API routes for ideas, their answers, version history and question rounds
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from incubator.dependencies import (
    get_answer_service,
    get_idea_service,
    get_question_selector,
    get_version_manager,
)
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger
from incubator.models import (
    AnswerWithQuestion,
    IdeaCreate,
    IdeaRead,
    IdeaUpdate,
    IdeaVersionRead,
    Question,
)
from incubator.services import AnswerService, IdeaService, QuestionSelector, VersionManager

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.get("", response_model=List[IdeaRead])
async def list_ideas(
    user_id: int = Query(..., alias="userId"),
    service: IdeaService = Depends(get_idea_service),
):
    """List the ideas owned by a user"""
    try:
        return await service.list_ideas(user_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching ideas for user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching ideas")


@router.get("/{idea_id}", response_model=IdeaRead)
async def get_idea(idea_id: int, service: IdeaService = Depends(get_idea_service)):
    try:
        return await service.get_idea(idea_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching idea {idea_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching idea")


@router.post("", response_model=IdeaRead, status_code=201)
async def create_idea(payload: IdeaCreate, service: IdeaService = Depends(get_idea_service)):
    """Create an idea and its initial version"""
    try:
        return await service.create_idea(payload)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error creating idea: {str(e)}")
        raise HTTPException(status_code=500, detail="Error creating idea")


@router.put("/{idea_id}", response_model=IdeaRead)
async def update_idea(
    idea_id: int,
    patch: IdeaUpdate,
    service: IdeaService = Depends(get_idea_service),
):
    """Update idea fields and record a new version"""
    try:
        return await service.update_idea(idea_id, patch)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error updating idea {idea_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error updating idea")


@router.delete("/{idea_id}", status_code=204)
async def delete_idea(idea_id: int, service: IdeaService = Depends(get_idea_service)):
    try:
        await service.delete_idea(idea_id)
        return Response(status_code=204)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error deleting idea {idea_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error deleting idea")


@router.get("/{idea_id}/answers", response_model=List[AnswerWithQuestion])
async def list_answers(idea_id: int, service: AnswerService = Depends(get_answer_service)):
    """Answers for an idea with their question text"""
    try:
        return await service.list_answers(idea_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching answers for idea {idea_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching answers")


@router.get("/{idea_id}/versions", response_model=List[IdeaVersionRead])
async def list_versions(idea_id: int, manager: VersionManager = Depends(get_version_manager)):
    """Version history, newest first"""
    try:
        return await manager.list_versions(idea_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching versions for idea {idea_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching versions")


@router.post("/{idea_id}/restore/{version_id}", response_model=IdeaRead)
async def restore_version(
    idea_id: int,
    version_id: int,
    manager: VersionManager = Depends(get_version_manager),
):
    """Restore an idea to one of its versions"""
    try:
        return await manager.restore(idea_id, version_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error restoring idea {idea_id} to version {version_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error restoring idea")


@router.post("/{idea_id}/generate-questions", response_model=List[Question])
async def generate_questions(
    idea_id: int,
    selector: QuestionSelector = Depends(get_question_selector),
):
    """Select the next round of follow-up questions"""
    try:
        return await selector.select(idea_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error generating questions for idea {idea_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error generating questions")
