#!/usr/bin/env python3
"""Seed the entity store with the reference data claims point at.

This script populates the configured backend (``STORE_BACKEND``) with:
- Agencies
- Coverages

Records whose code already exists are left untouched, so the script can
be re-run safely.
"""

import asyncio
import sys
from pathlib import Path

from beartype import beartype
from dotenv import load_dotenv

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from claim_registry.core.config import get_settings  # noqa: E402
from claim_registry.core.database import Database  # noqa: E402
from claim_registry.models import Agency, Coverage  # noqa: E402
from claim_registry.store import EntityKind, EntityStore, create_store  # noqa: E402

AGENCIES: tuple[Agency, ...] = (
    Agency(code="AG-MTL", label="Montreal Downtown Agency"),
    Agency(code="AG-QC", label="Quebec City Agency"),
    Agency(code="AG-LAV", label="Laval Agency"),
    Agency(code="AG-WEB", label="Online Reporting"),
)

COVERAGES: tuple[Coverage, ...] = (
    Coverage(code="COLL", uid="CV-001", label="Collision"),
    Coverage(code="CIVL", uid="CV-002", label="Civil Liability"),
    Coverage(code="THEFT", uid="CV-003", label="Theft"),
    Coverage(code="GLASS", uid="CV-004", label="Glass Breakage"),
    Coverage(code="BODY", uid="CV-005", label="Bodily Injury"),
)


@beartype
async def seed_reference_data(store: EntityStore) -> tuple[int, int]:
    """Create missing agencies and coverages; return how many were added."""
    added_agencies = 0
    for agency in AGENCIES:
        if await store.find_one(EntityKind.AGENCY, {"code": agency.code}) is None:
            await store.create(EntityKind.AGENCY, agency)
            added_agencies += 1

    added_coverages = 0
    for coverage in COVERAGES:
        if await store.find_one(EntityKind.COVERAGE, {"code": coverage.code}) is None:
            await store.create(EntityKind.COVERAGE, coverage)
            added_coverages += 1

    return added_agencies, added_coverages


@beartype
async def main() -> None:
    """Execute main seeding function."""
    load_dotenv()
    settings = get_settings()

    if settings.store_backend != "postgres":
        print("WARNING: in-memory store selected; seeded data will not persist")

    db = Database(settings) if settings.store_backend == "postgres" else None
    try:
        if db is not None:
            await db.connect()
        store = create_store(settings, db)
        agencies, coverages = await seed_reference_data(store)
    finally:
        if db is not None:
            await db.disconnect()

    print("\nSeeding completed successfully!")
    print("Summary:")
    print(f"  - Agencies added: {agencies}")
    print(f"  - Coverages added: {coverages}")


if __name__ == "__main__":
    asyncio.run(main())
