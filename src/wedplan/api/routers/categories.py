from typing import List

from fastapi import APIRouter, Depends, status

from wedplan.api.dependencies import get_category_service
from wedplan.api.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from wedplan.domain.category import CategoryService

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
def list_categories(service: CategoryService = Depends(get_category_service)):
    return [CategoryResponse.from_entity(c) for c in service.list_categories()]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryCreate, service: CategoryService = Depends(get_category_service)):
    category_id = service.create_category(body.name)
    return CategoryResponse.from_entity(service.get_category(category_id))


@router.put("/{category_id}", response_model=CategoryResponse)
def rename_category(
    category_id: int,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    return CategoryResponse.from_entity(service.rename_category(category_id, body.name))


@router.delete("/{category_id}")
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Delete a category; refused with 409 while costs reference it"""
    service.delete_category(category_id)
    return {"success": True}
