# core/database.py
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import NullPool

from settings import DATABASE_URL, DEBUG

engine = create_async_engine(
    DATABASE_URL,
    echo=DEBUG,
    # sqlite connections are cheap; don't keep them across event loops
    poolclass=NullPool if DATABASE_URL.startswith("sqlite") else None,
)

class Base(DeclarativeBase):
    pass

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def get_async_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session

async def init_db() -> None:
    # register models on Base.metadata
    import models.profile  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
