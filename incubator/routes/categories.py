"""
API routes for categories
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from incubator.dependencies import get_catalog_service
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger
from incubator.models import Category, CategoryCreate, CategoryUpdate
from incubator.services import CatalogService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[Category])
async def list_categories(
    user_id: Optional[int] = Query(None, alias="userId"),
    service: CatalogService = Depends(get_catalog_service),
):
    """Global categories plus the user's own"""
    try:
        return await service.list_categories(user_id)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error fetching categories: {str(e)}")
        raise HTTPException(status_code=500, detail="Error fetching categories")


@router.post("", response_model=Category, status_code=201)
async def create_category(payload: CategoryCreate, service: CatalogService = Depends(get_catalog_service)):
    try:
        return await service.create_category(payload)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error creating category: {str(e)}")
        raise HTTPException(status_code=500, detail="Error creating category")


@router.put("/{category_id}", response_model=Category)
async def update_category(
    category_id: int,
    patch: CategoryUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await service.update_category(category_id, patch)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error updating category {category_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error updating category")


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: int, service: CatalogService = Depends(get_catalog_service)):
    try:
        await service.delete_category(category_id)
        return Response(status_code=204)
    except IncubatorError:
        raise
    except Exception as e:
        logger.error(f"Error deleting category {category_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error deleting category")
