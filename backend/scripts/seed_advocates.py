"""Seed the advocates table with a small sample directory."""

from __future__ import annotations

import asyncio
import json
import logging

from advocates_api.infra.postgres import close_pool, get_pool
from advocates_api.obs.logging import configure_logging

logger = logging.getLogger("advocates.seed")

# The last two rows store specialties as a bare string, as some imports did.
SAMPLE_ADVOCATES = [
	("John", "Doe", "New York", "MD", ["Bipolar", "LGBTQ", "Medication/Prescribing"], 10, 5551234567),
	("Jane", "Smith", "Los Angeles", "PhD", ["Trauma & PTSD", "Personality disorders"], 8, 5559876543),
	("Alice", "Johnson", "Chicago", "MSW", ["Relationship issues (family, friends, couple, etc)"], 5, 5554567890),
	("Michael", "Brown", "Houston", "MD", ["Substance use/abuse", "Eating disorders"], 12, 5556543210),
	("Emily", "Davis", "Phoenix", "PhD", ["Coaching (leadership, career, academic and wellness)"], 7, 5553210987),
	("Chris", "Martinez", "Philadelphia", "MSW", ["Pediatrics", "Schizophrenia and psychotic disorders"], 9, 5557890123),
	("Jessica", "Taylor", "San Antonio", "MD", ["Suicide History/Attempts", "Trauma & PTSD"], 11, 5554561234),
	("David", "Harris", "San Diego", "PhD", ["Life coaching", "Chronic pain"], 6, 5557896543),
	("Laura", "Clark", "Dallas", "MSW", "Women's issues", 4, 5550123456),
	("Daniel", "Lewis", "San Jose", "MD", "ADHD", 13, 5553217654),
]


async def main() -> int:
	configure_logging()
	pool = await get_pool()
	try:
		async with pool.acquire() as conn:
			async with conn.transaction():
				await conn.executemany(
					"""
					INSERT INTO advocates (
						first_name, last_name, city, degree, specialties, years_of_experience, phone_number
					)
					VALUES ($1, $2, $3, $4, $5::jsonb, $6, $7)
					""",
					[
						(first, last, city, degree, json.dumps(specialties), years, phone)
						for first, last, city, degree, specialties, years, phone in SAMPLE_ADVOCATES
					],
				)
		logger.info("seeded %d advocates", len(SAMPLE_ADVOCATES))
	finally:
		await close_pool()
	return 0


if __name__ == "__main__":
	raise SystemExit(asyncio.run(main()))
