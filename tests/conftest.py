"""
Test configuration and fixtures for the Sejour rental API.
Provides database fixtures, test data factories, fake adapters and common test utilities.
"""

import os

# Settings are read at import time, so the test environment must be set first
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")

import asyncio
import io
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional, Set

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image as PILImage
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from sejour.main import app
from sejour.database import Base, get_db
from sejour.models import Property, Image
from sejour.repositories.property import PropertyRepository
from sejour.repositories.image import ImageRepository
from sejour.repositories.booking import BookingRepository
from sejour.services.booking import BookingService
from sejour.services.geocoding import Coordinates
from sejour.services.image import ImageService
from sejour.services.property import PropertyService
from sejour.utils.auth import create_access_token
from sejour.utils.dependencies import get_geocoding_service, get_image_storage
from sejour.utils.exceptions import AddressNotFoundError


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """In-memory database, fresh schema per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# Fake adapters
class FakeGeocoder:
    """Geocoder returning fixed coordinates, or failing for unknown streets."""

    def __init__(self, lat: str = "37.8044", lng: str = "-122.2712"):
        self.coordinates = Coordinates(lat=Decimal(lat), lng=Decimal(lng))
        self.unknown_streets: Set[str] = set()
        self.error: Optional[Exception] = None
        self.calls: List[tuple] = []

    async def geocode(self, street: str, city: str, state: str) -> Coordinates:
        self.calls.append((street, city, state))
        if self.error is not None:
            raise self.error
        if street in self.unknown_streets:
            raise AddressNotFoundError(f"{street}, {city}, {state}")
        return self.coordinates


class FakeStorage:
    """In-memory object storage; content listed in fail_contents is rejected."""

    def __init__(self, delay: float = 0.01):
        self.objects: Dict[str, bytes] = {}
        self.delays: Dict[bytes, float] = {}
        self.finished: List[bytes] = []
        self.metadata: Dict[str, int] = {}
        self.deleted: List[str] = []
        self.fail_contents: Set[bytes] = set()
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def store(self, key: str, content: bytes, property_id: int,
                    content_type: str = "application/octet-stream") -> str:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(content, self.delay))
            if content in self.fail_contents:
                raise ConnectionError(f"storage rejected {key}")
            self.objects[key] = content
            self.metadata[key] = property_id
            return key
        finally:
            self.in_flight -= 1
            self.finished.append(content)

    async def delete(self, key: str) -> None:
        self.deleted.append(key)
        self.objects.pop(key, None)


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    fake_geocoder: FakeGeocoder,
    fake_storage: FakeStorage
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database and adapter overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoding_service] = lambda: fake_geocoder
    app.dependency_overrides[get_image_storage] = lambda: fake_storage

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    """Create an image repository instance."""
    return ImageRepository(db_session)


@pytest.fixture
def booking_repository(db_session: AsyncSession) -> BookingRepository:
    """Create a booking repository instance."""
    return BookingRepository(db_session)


# Service fixtures
@pytest.fixture
def image_service(db_session: AsyncSession) -> ImageService:
    """Create an image service instance."""
    return ImageService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession, image_service: ImageService) -> PropertyService:
    """Create a property service instance."""
    return PropertyService(db_session, image_service)


@pytest.fixture
def booking_service(db_session: AsyncSession) -> BookingService:
    """Create a booking service instance."""
    return BookingService(db_session)


# Test data factories
class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Test Property",
        description: str = "A beautiful test property",
        price: Decimal = Decimal("100.00"),
        street: str = "123 Main St",
        city: str = "Oakland",
        state: str = "CA",
        zipcode: str = "94607",
        owner_id: int = 1,
        latitude: str = "37.8044",
        longitude: str = "-122.2712",
        archived: bool = False
    ) -> dict:
        """Create property data dictionary."""
        return {
            "title": title,
            "description": description,
            "price": price,
            "street": street,
            "city": city,
            "state": state,
            "zipcode": zipcode,
            "owner_id": owner_id,
            "latitude": latitude,
            "longitude": longitude,
            "archived": archived,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(PropertyFactory.create_property_data(**kwargs))

    @staticmethod
    def create_request_body(**overrides) -> dict:
        """camelCase request body for POST /properties."""
        body = {
            "title": "Sunny loft",
            "street": "123 Main St",
            "city": "Oakland",
            "state": "CA",
            "zipcode": "94607",
            "description": "Bright loft near the lake",
            "price": 120,
        }
        body.update(overrides)
        return body


class ImageFactory:
    """Factory for creating test property images."""

    @staticmethod
    async def create_image(
        image_repo: ImageRepository,
        property_id: int,
        image_key: Optional[str] = None,
        is_cover_image: bool = False
    ) -> Image:
        """Create a test image row in the database."""
        return await image_repo.create_image(
            image_key or str(uuid.uuid4()),
            property_id,
            is_cover_image,
        )

    @staticmethod
    def image_bytes(fmt: str = "PNG", color: str = "red", size: tuple = (4, 4)) -> bytes:
        """Real, tiny image content."""
        buffer = io.BytesIO()
        PILImage.new("RGB", size, color).save(buffer, format=fmt)
        return buffer.getvalue()


# Common test fixtures
@pytest.fixture
async def test_property(property_repository: PropertyRepository) -> Property:
    """Create a test property owned by user 1."""
    return await PropertyFactory.create_property(property_repository, owner_id=1)


@pytest.fixture
async def test_archived_property(property_repository: PropertyRepository) -> Property:
    """Create an archived property owned by user 1."""
    return await PropertyFactory.create_property(
        property_repository,
        title="Archived Property",
        owner_id=1,
        archived=True
    )


@pytest.fixture
async def test_images(image_repository: ImageRepository, test_property: Property) -> List[Image]:
    """Three images on the test property, the first one as cover."""
    return [
        await ImageFactory.create_image(image_repository, test_property.id, is_cover_image=(i == 0))
        for i in range(3)
    ]


# Utility functions for tests
def auth_headers(user_id: int = 1, username: str = "tester") -> dict:
    """Authorization header for a principal."""
    return {"Authorization": f"Bearer {create_access_token(user_id, username)}"}


async def count_covers(session: AsyncSession, property_id: int) -> int:
    """Number of images flagged as cover for a property."""
    repo = ImageRepository(session)
    images = await repo.get_by_property_id(property_id)
    return sum(1 for image in images if image.is_cover_image)
