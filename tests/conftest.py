import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from charter.core.database import get_db
from charter.core.security import create_access_token
from charter.main import app
from charter.models import (
    AdditionalService,
    AppRole,
    Base,
    FoodItem,
    UserRoleAssignment,
    WaterSport,
    Yacht,
    YachtOption,
)

ADMIN_SUBJECT = "admin-7f3c"
USER_SUBJECT = "visitor-21aa"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def yacht(session_factory):
    """Available yacht at 500/hour with two active options and one inactive one."""
    async with session_factory() as session:
        yacht = Yacht(
            name="Azure Dream",
            description="55ft luxury yacht",
            capacity=12,
            price_per_hour=Decimal("500.00"),
            price_per_day=Decimal("3500.00"),
            location="Dubai Marina",
            is_available=True,
        )
        yacht.options = [
            YachtOption(name="Jet Ski", price=Decimal("200.00"), display_order=1),
            YachtOption(name="Catering", price=Decimal("150.00"), display_order=2),
            YachtOption(
                name="Fishing Gear", price=Decimal("80.00"), display_order=3, is_active=False
            ),
        ]
        session.add(yacht)
        await session.commit()
        return yacht


@pytest_asyncio.fixture
async def services(session_factory):
    async with session_factory() as session:
        water_sport = WaterSport(
            name="Flyboard", pax=1, price_30min=Decimal("350.00"), price_60min=Decimal("600.00")
        )
        food_item = FoodItem(name="BBQ Platter", price_per_person=Decimal("85.00"))
        additional = AdditionalService(name="Photographer", price=Decimal("400.00"))
        session.add_all([water_sport, food_item, additional])
        await session.commit()
        return {"water_sport": water_sport, "food": food_item, "additional": additional}


@pytest_asyncio.fixture
async def admin_headers(session_factory):
    async with session_factory() as session:
        session.add(UserRoleAssignment(user_id=ADMIN_SUBJECT, role=AppRole.ADMIN))
        await session.commit()
    return {"Authorization": f"Bearer {create_access_token(ADMIN_SUBJECT)}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {create_access_token(USER_SUBJECT)}"}
