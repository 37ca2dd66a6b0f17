"""Business logic for categories."""

from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, StoreError
from app.core.metrics import record_category_operation
from app.db.models.category import Category, utcnow
from app.schemas.categories import CategoryCreate, CategoryResponse, CategoryUpdate


class CategoryService:
    """Service for category-related operations."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def _fail(self, action: str, exc: SQLAlchemyError) -> StoreError:
        await self.db.rollback()
        logger.error(f"Failed to {action}: {exc}")
        return StoreError(f"Failed to {action}")

    async def _get_or_404(self, category_id: int) -> Category:
        try:
            result = await self.db.execute(select(Category).where(Category.id == category_id))
            category = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail("fetch category", e) from e

        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    async def list_categories(self) -> List[CategoryResponse]:
        """Get every category."""
        try:
            result = await self.db.execute(select(Category).order_by(Category.id))
            categories = result.scalars().all()
        except SQLAlchemyError as e:
            raise await self._fail("fetch categories", e) from e

        record_category_operation("list")
        return [CategoryResponse.model_validate(category) for category in categories]

    async def get_category(self, category_id: int) -> CategoryResponse:
        """Get a specific category by ID."""
        category = await self._get_or_404(category_id)
        record_category_operation("get")
        return CategoryResponse.model_validate(category)

    async def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        """Create a new category."""
        category = Category(**category_data.model_dump())

        try:
            self.db.add(category)
            await self.db.commit()
            await self.db.refresh(category)
        except SQLAlchemyError as e:
            raise await self._fail("create category", e) from e

        logger.info(f"Created category with ID {category.id}")
        record_category_operation("create")
        return CategoryResponse.model_validate(category)

    async def update_category(self, category_id: int, category_data: CategoryUpdate) -> CategoryResponse:
        """Update the fields present in ``category_data``."""
        category = await self._get_or_404(category_id)

        for key, value in category_data.model_dump(exclude_unset=True).items():
            setattr(category, key, value)
        category.updated_at = utcnow()

        try:
            await self.db.commit()
            await self.db.refresh(category)
        except SQLAlchemyError as e:
            raise await self._fail("update category", e) from e

        logger.info(f"Updated category with ID {category.id}")
        record_category_operation("update")
        return CategoryResponse.model_validate(category)

    async def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        category = await self._get_or_404(category_id)

        try:
            await self.db.delete(category)
            await self.db.commit()
        except SQLAlchemyError as e:
            raise await self._fail("delete category", e) from e

        logger.info(f"Deleted category with ID {category_id}")
        record_category_operation("delete")
