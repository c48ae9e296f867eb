import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from charter.core.database import async_database_url


class TestAsyncDatabaseUrl:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgresql://u:p@db/charter", "postgresql+asyncpg://u:p@db/charter"),
            ("postgres://u:p@db/charter", "postgresql+asyncpg://u:p@db/charter"),
            ("sqlite:///./charter.db", "sqlite+aiosqlite:///./charter.db"),
            ("postgresql+asyncpg://u:p@db/charter", "postgresql+asyncpg://u:p@db/charter"),
        ],
    )
    def test_rewrite(self, url, expected):
        assert async_database_url(url) == expected

    @pytest.mark.asyncio
    async def test_plain_sqlite_url_connects(self):
        engine = create_async_engine(async_database_url("sqlite:///:memory:"))
        try:
            async with engine.connect() as conn:
                assert (await conn.execute(text("SELECT 1"))).scalar_one() == 1
        finally:
            await engine.dispose()
