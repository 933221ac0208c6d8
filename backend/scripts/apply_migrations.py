"""Apply backend/migrations/*.sql in order, recording versions in schema_migrations."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from advocates_api.infra.postgres import close_pool, get_pool
from advocates_api.obs.logging import configure_logging

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"

logger = logging.getLogger("advocates.migrations")


async def main() -> int:
	configure_logging()
	paths = sorted(MIGRATIONS_DIR.glob("*.sql"))
	if not paths:
		logger.error("no migration files found in %s", MIGRATIONS_DIR)
		return 1
	pool = await get_pool()
	try:
		async with pool.acquire() as conn:
			await conn.execute(
				"""
				CREATE TABLE IF NOT EXISTS schema_migrations (
					version TEXT PRIMARY KEY,
					applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
				)
				"""
			)
			applied = {row["version"] for row in await conn.fetch("SELECT version FROM schema_migrations")}
			for path in paths:
				version = path.name.split("_", 1)[0]
				if version in applied:
					continue
				async with conn.transaction():
					await conn.execute(path.read_text())
					await conn.execute(
						"INSERT INTO schema_migrations (version) VALUES ($1) ON CONFLICT (version) DO NOTHING",
						version,
					)
				logger.info("applied migration %s", path.name)
	finally:
		await close_pool()
	return 0


if __name__ == "__main__":
	raise SystemExit(asyncio.run(main()))
