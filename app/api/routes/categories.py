"""
Category CRUD endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from app.api.dependencies import get_category_service
from app.api.responses import Tags, error_responses
from app.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.categories import CategoryService

router = APIRouter()


@router.get(
    "/",
    response_model=List[CategoryResponse],
    summary="List categories",
    responses=error_responses(status.HTTP_500_INTERNAL_SERVER_ERROR),
    tags=[Tags.CATEGORIES],
)
async def get_all_categories(service: CategoryService = Depends(get_category_service)) -> List[CategoryResponse]:
    return await service.list_categories()


@router.post(
    "/",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses=error_responses(status.HTTP_400_BAD_REQUEST, status.HTTP_500_INTERNAL_SERVER_ERROR),
    tags=[Tags.CATEGORIES],
)
async def create_category(
    category_data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.create_category(category_data)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Get a category",
    responses=error_responses(status.HTTP_400_BAD_REQUEST, status.HTTP_404_NOT_FOUND),
    tags=[Tags.CATEGORIES],
)
async def get_category(
    category_id: int = Path(..., description="Category ID"),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.get_category(category_id)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
    description="Updates the fields present in the body; omitted fields keep their values.",
    responses=error_responses(
        status.HTTP_400_BAD_REQUEST, status.HTTP_404_NOT_FOUND, status.HTTP_500_INTERNAL_SERVER_ERROR
    ),
    tags=[Tags.CATEGORIES],
)
async def update_category(
    category_data: CategoryUpdate,
    category_id: int = Path(..., description="Category ID"),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.update_category(category_id, category_data)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a category",
    responses=error_responses(status.HTTP_404_NOT_FOUND, status.HTTP_500_INTERNAL_SERVER_ERROR),
    tags=[Tags.CATEGORIES],
)
async def delete_category(
    category_id: int = Path(..., description="Category ID"),
    service: CategoryService = Depends(get_category_service),
) -> Response:
    await service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
