"""
Property repository for managing rental listings with search and filtering.
Archived properties are invisible to every read except existence checks.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_, asc
from sejour.repositories.base import BaseRepository
from sejour.models.property import Property
from sejour.schemas.property import PropertySearchFilters
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Rows are archived rather than deleted.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property.

        Args:
            property_data: Column values including owner and coordinates

        Returns:
            Created property instance
        """
        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def get_active(self, property_id: int) -> Optional[Property]:
        """
        Get a non-archived property by id.

        Returns:
            Property or None if missing or archived
        """
        try:
            query = select(Property).where(
                and_(Property.id == property_id, Property.archived.is_(False))
            ).execution_options(populate_existing=True)
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get property {property_id}: {e}")
            raise

    async def search(self, filters: PropertySearchFilters) -> List[Property]:
        """
        Search live properties with price and description filters.

        Args:
            filters: Validated search filters including pagination

        Returns:
            One page of properties ordered by id ascending
        """
        try:
            query = select(Property).execution_options(populate_existing=True)

            conditions = self._build_filter_conditions(filters)
            query = query.where(and_(*conditions))

            query = (
                query.order_by(asc(Property.id))
                .offset(filters.offset)
                .limit(filters.limit)
            )

            result = await self.db.execute(query)
            properties = result.scalars().all()

            logger.debug(
                f"Property search returned {len(properties)} results "
                f"(page {filters.page_number}, limit {filters.limit})"
            )
            return list(properties)
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.

        Args:
            filters: PropertySearchFilters instance

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = [Property.archived.is_(False)]

        # Price range filters, both bounds inclusive
        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)

        # Case-insensitive substring; % and _ in the search text match literally
        if filters.description:
            conditions.append(Property.description.icontains(filters.description, autoescape=True))

        return conditions

    async def update_active(self, property_id: int, changes: Dict[str, Any]) -> Optional[Property]:
        """
        Apply changes to a non-archived property.

        Args:
            property_id: ID of the property
            changes: Only the fields to write; empty strings are written as-is

        Returns:
            Updated property, or None if missing or archived
        """
        if not changes:
            return await self.get_active(property_id)

        try:
            stmt = (
                update(Property)
                .where(and_(Property.id == property_id, Property.archived.is_(False)))
                .values(**changes)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)

            if result.rowcount == 0:
                await self.db.rollback()
                logger.debug(f"Property {property_id} not found for update")
                return None

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update property {property_id}: {e}")
            raise

        updated = await self.get_active(property_id)
        logger.info(f"Updated property {property_id}: {sorted(changes)}")
        return updated

    async def archive(self, property_id: int) -> bool:
        """
        Archive a live property.

        Returns:
            True if the property was archived, False if missing or already archived
        """
        try:
            stmt = (
                update(Property)
                .where(and_(Property.id == property_id, Property.archived.is_(False)))
                .values(archived=True)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to archive property {property_id}: {e}")
            raise

        archived = result.rowcount > 0
        if archived:
            logger.info(f"Archived property {property_id}")
        return archived

