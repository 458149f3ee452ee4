from __future__ import annotations

import asyncio
import logging
import os
import sys

from sqlalchemy.ext.asyncio import create_async_engine


def set_cwd() -> None:
    """Sets the CWD to the repository root, so `config` and `app` import."""

    os.chdir("../../")
    sys.path.insert(0, os.getcwd())


def async_dsn(dsn: str) -> str:
    if dsn.startswith("postgresql://"):
        return dsn.replace("postgresql://", "postgresql+asyncpg://", 1)

    if dsn.startswith("sqlite://"):
        return dsn.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return dsn


async def create_tables(dsn: str) -> None:
    from app.state.schema import metadata

    engine = create_async_engine(async_dsn(dsn))
    try:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    finally:
        await engine.dispose()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
    )
    set_cwd()

    import config

    logging.info("Creating tables (existing ones are left untouched)")
    asyncio.run(create_tables(config.DB_DSN))

    logging.info("Schema is up to date!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
