"""Pytest configuration and fixtures for trendline tests."""

from collections.abc import AsyncGenerator
from datetime import datetime

import pytest
from sqlalchemy import DateTime, Float, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Test database URL - use SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class Base(DeclarativeBase):
    """Declarative base for test models."""

    pass


class Order(Base):
    """Order model used as the trend source table."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="paid")
    total: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


@pytest.fixture
async def engine():
    """Create a test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


# ============================================================================
# Factory Functions
# ============================================================================


class OrderFactory:
    """Factory for creating test orders."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create(
        self,
        created_at: datetime,
        total: float | None = 10.0,
        status: str = "paid",
        paid_at: datetime | None = None,
    ) -> Order:
        """Create an order with the given attributes."""
        order = Order(created_at=created_at, total=total, status=status, paid_at=paid_at)
        self.db_session.add(order)
        await self.db_session.commit()
        await self.db_session.refresh(order)
        return order


@pytest.fixture
def order_factory(db_session: AsyncSession) -> OrderFactory:
    """Factory fixture for creating test orders."""
    return OrderFactory(db_session)
