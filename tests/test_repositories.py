"""
Tests for repository classes.
Covers persistence, search filters, pagination, archiving and the cover image toggle.
"""

import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from sejour.models import Booking, Image, Property
from sejour.repositories.property import PropertyRepository
from sejour.repositories.image import ImageRepository
from sejour.repositories.booking import BookingRepository
from sejour.schemas.property import PropertySearchFilters
from tests.conftest import PropertyFactory, ImageFactory


class TestBaseRepository:
    """Test base repository functionality through PropertyRepository."""

    @pytest.mark.asyncio
    async def test_create(self, property_repository: PropertyRepository):
        """Test creating a record."""
        prop = await PropertyFactory.create_property(property_repository, title="Fresh listing")

        assert prop.id is not None
        assert prop.title == "Fresh listing"
        assert prop.archived is False
        assert prop.created_at is not None

    @pytest.mark.asyncio
    async def test_get_by_id(self, property_repository: PropertyRepository, test_property: Property):
        """Test getting a record by ID."""
        retrieved = await property_repository.get_by_id(test_property.id)

        assert retrieved is not None
        assert retrieved.id == test_property.id
        assert retrieved.title == test_property.title

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, property_repository: PropertyRepository):
        """Test getting a non-existent record."""
        assert await property_repository.get_by_id(999999) is None

    @pytest.mark.asyncio
    async def test_exists_includes_archived(
        self,
        property_repository: PropertyRepository,
        test_archived_property: Property
    ):
        """Archived rows still exist."""
        assert await property_repository.exists(test_archived_property.id) is True
        assert await property_repository.exists(999999) is False


class TestPropertyRepository:
    """Test PropertyRepository search, update and archive."""

    @pytest.mark.asyncio
    async def test_get_active_skips_archived(
        self,
        property_repository: PropertyRepository,
        test_property: Property,
        test_archived_property: Property
    ):
        assert (await property_repository.get_active(test_property.id)).id == test_property.id
        assert await property_repository.get_active(test_archived_property.id) is None

    @pytest.mark.asyncio
    async def test_search_price_bounds_are_inclusive(self, property_repository: PropertyRepository):
        for price in ("50.00", "100.00", "150.00", "200.00"):
            await PropertyFactory.create_property(property_repository, price=Decimal(price))

        filters = PropertySearchFilters(min_price=Decimal("100"), max_price=Decimal("150"))
        results = await property_repository.search(filters)

        assert [p.price for p in results] == [Decimal("100.00"), Decimal("150.00")]

    @pytest.mark.asyncio
    async def test_search_description_is_case_insensitive_substring(
        self,
        property_repository: PropertyRepository
    ):
        await PropertyFactory.create_property(property_repository, description="Cozy cabin by the LAKE")
        await PropertyFactory.create_property(property_repository, description="Downtown studio")

        results = await property_repository.search(PropertySearchFilters(description="lake"))

        assert len(results) == 1
        assert results[0].description == "Cozy cabin by the LAKE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("term, expected", [
        ("50%", ["50% off all week"]),
        ("room_a", ["room_a"]),
        ("ROOM_A", ["room_a"]),
    ])
    async def test_search_description_wildcards_match_literally(
        self,
        property_repository: PropertyRepository,
        term,
        expected
    ):
        """% and _ in the search text are plain characters."""
        for description in ("50 dollars off", "50% off all week", "room_a", "roomXa"):
            await PropertyFactory.create_property(property_repository, description=description)

        results = await property_repository.search(PropertySearchFilters(description=term))

        assert [p.description for p in results] == expected
        assert all(term.lower() in p.description.lower() for p in results)

    @pytest.mark.asyncio
    async def test_search_excludes_archived(
        self,
        property_repository: PropertyRepository,
        test_property: Property,
        test_archived_property: Property
    ):
        results = await property_repository.search(PropertySearchFilters())

        assert [p.id for p in results] == [test_property.id]

    @pytest.mark.asyncio
    async def test_search_pagination_ordered_by_id(self, property_repository: PropertyRepository):
        created = [
            await PropertyFactory.create_property(property_repository, title=f"Listing {i}")
            for i in range(5)
        ]

        page_one = await property_repository.search(PropertySearchFilters(limit=2, page_number=1))
        page_three = await property_repository.search(PropertySearchFilters(limit=2, page_number=3))
        page_four = await property_repository.search(PropertySearchFilters(limit=2, page_number=4))

        assert [p.id for p in page_one] == [created[0].id, created[1].id]
        assert [p.id for p in page_three] == [created[4].id]
        assert page_four == []

    @pytest.mark.asyncio
    async def test_update_active_writes_only_given_fields(
        self,
        property_repository: PropertyRepository,
        test_property: Property
    ):
        updated = await property_repository.update_active(test_property.id, {"description": ""})

        assert updated.description == ""
        assert updated.title == "Test Property"
        assert updated.price == Decimal("100.00")

    @pytest.mark.asyncio
    async def test_update_active_empty_changes_returns_current(
        self,
        property_repository: PropertyRepository,
        test_property: Property
    ):
        updated = await property_repository.update_active(test_property.id, {})

        assert updated.id == test_property.id
        assert updated.title == test_property.title

    @pytest.mark.asyncio
    async def test_update_active_ignores_archived(
        self,
        property_repository: PropertyRepository,
        test_archived_property: Property
    ):
        assert await property_repository.update_active(test_archived_property.id, {"title": "New"}) is None

    @pytest.mark.asyncio
    async def test_archive(self, property_repository: PropertyRepository, test_property: Property):
        assert await property_repository.archive(test_property.id) is True
        assert await property_repository.get_active(test_property.id) is None
        assert (await property_repository.get_by_id(test_property.id)).archived is True

        # Second archive finds nothing live to archive
        assert await property_repository.archive(test_property.id) is False


class TestImageRepository:
    """Test ImageRepository operations."""

    @pytest.mark.asyncio
    async def test_get_by_property_id_ordered(
        self,
        image_repository: ImageRepository,
        test_property: Property,
        test_images
    ):
        images = await image_repository.get_by_property_id(test_property.id)

        assert [i.id for i in images] == sorted(i.id for i in test_images)

    @pytest.mark.asyncio
    async def test_delete_by_key(self, image_repository: ImageRepository, test_images):
        key = test_images[1].image_key

        assert await image_repository.delete_by_key(key) is True
        assert await image_repository.get_by_key(key) is None
        assert await image_repository.delete_by_key(key) is False

    @pytest.mark.asyncio
    async def test_set_cover_moves_flag(
        self,
        image_repository: ImageRepository,
        test_property: Property,
        test_images
    ):
        cover = await image_repository.set_cover(test_images[2].id, test_property.id)

        assert cover.id == test_images[2].id
        assert cover.is_cover_image is True
        current = await image_repository.get_cover_image(test_property.id)
        assert current.id == test_images[2].id

    @pytest.mark.asyncio
    async def test_set_cover_missing_image_keeps_previous(
        self,
        image_repository: ImageRepository,
        test_property: Property,
        test_images
    ):
        # A rollback expires loaded rows, so read ids first
        property_id, cover_id = test_property.id, test_images[0].id

        assert await image_repository.set_cover(999999, property_id) is None

        current = await image_repository.get_cover_image(property_id)
        assert current.id == cover_id

    @pytest.mark.asyncio
    async def test_set_cover_image_of_other_property(
        self,
        property_repository: PropertyRepository,
        image_repository: ImageRepository,
        test_property: Property,
        test_images
    ):
        other = await PropertyFactory.create_property(property_repository, owner_id=2)
        foreign = await ImageFactory.create_image(image_repository, other.id)
        property_id, cover_id = test_property.id, test_images[0].id

        assert await image_repository.set_cover(foreign.id, property_id) is None
        assert (await image_repository.get_cover_image(property_id)).id == cover_id

    @pytest.mark.asyncio
    async def test_database_refuses_second_cover(
        self,
        image_repository: ImageRepository,
        test_property: Property,
        test_images
    ):
        with pytest.raises(IntegrityError):
            await ImageFactory.create_image(image_repository, test_property.id, is_cover_image=True)

    @pytest.mark.asyncio
    async def test_image_key_unique(self, image_repository: ImageRepository, test_property: Property):
        await ImageFactory.create_image(image_repository, test_property.id, image_key="same-key")

        with pytest.raises(IntegrityError):
            await ImageFactory.create_image(image_repository, test_property.id, image_key="same-key")


class TestBookingRepository:
    """Test BookingRepository operations."""

    @pytest.mark.asyncio
    async def test_overlapping_bookings_are_stored(
        self,
        booking_repository: BookingRepository,
        test_property: Property
    ):
        first = await booking_repository.create_booking(date(2026, 7, 1), date(2026, 7, 5), test_property.id, 2)
        second = await booking_repository.create_booking(date(2026, 7, 3), date(2026, 7, 8), test_property.id, 3)

        assert first.id != second.id
        assert second.guest_id == 3


class TestModelMapping:
    """Rows refer to each other by foreign key only."""

    @pytest.mark.parametrize("model", [Property, Image, Booking])
    def test_no_mapped_relationships(self, model):
        assert list(inspect(model).relationships) == []
