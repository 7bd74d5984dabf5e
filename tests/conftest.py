"""
Test suite configuration and shared fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Test environment, set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["PLANT_TIMEZONE"] = "America/Sao_Paulo"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.setdefault("LOG_FORMAT", "console")

from toolwear.core.database import Base, get_db
from toolwear.models import MoldComment, ProductionEntry, ScrapEntry, SwapEvent, Tool, ToolCondition

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    from toolwear.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def plant_tz():
    from toolwear.core.config import get_settings
    return get_settings().tzinfo


class TestDataFactory:
    """Builds unsaved model instances with sensible defaults"""

    __test__ = False

    @staticmethod
    def tool(mold_id: str = "MOLDE-A", tool_id: str = "FER-A1", **kwargs) -> Tool:
        data = {
            "mold_id": mold_id,
            "tool_id": tool_id,
            "useful_life": 100000,
            "accumulated_production": 0,
            "condition": ToolCondition.OK,
            "warning": False,
            "notes": "",
            "is_active": True,
        }
        data.update(kwargs)
        return Tool(**data)

    @staticmethod
    def production_entry(tool: Tool, pieces: int = 1000, production_date: date = date(2025, 8, 21)) -> ProductionEntry:
        return ProductionEntry(tool=tool, pieces=pieces, production_date=production_date)

    @staticmethod
    def swap_event(mold_id: str = "MOLDE-A", tool_id: str = "FER-A1", **kwargs) -> SwapEvent:
        data = {
            "mold_id": mold_id,
            "tool_id": tool_id,
            "production_before_swap": 50000,
        }
        data.update(kwargs)
        return SwapEvent(**data)

    @staticmethod
    def scrap_entry(mold_id: str = "MOLDE-A", month_start: date = date(2025, 8, 1), quantity: int = 100) -> ScrapEntry:
        return ScrapEntry(mold_id=mold_id, month_start=month_start, quantity=quantity)

    @staticmethod
    def mold_comment(mold_id: str = "MOLDE-A", comment: str = "Ajuste de pressão", comment_date: date = date(2025, 8, 21)) -> MoldComment:
        return MoldComment(mold_id=mold_id, comment=comment, comment_date=comment_date)


@pytest.fixture
def factory() -> TestDataFactory:
    return TestDataFactory()
