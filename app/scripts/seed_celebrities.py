"""
Seed the celebrity store. Celebrities are only ever created here; the API
never creates or deletes them.

Usage:
    python -m app.scripts.seed_celebrities                    # built-in seed list
    python -m app.scripts.seed_celebrities --file seed.json   # JSON list of celebrities
    python -m app.scripts.seed_celebrities --dry-run          # validate only

Each entry: {"name": ..., "score": 0..1, "count": >=0, "reason": ..., "image_url": ...}
"id" is optional; a UUID is generated when absent. Existing ids are skipped.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

logging.basicConfig(level=logging.INFO, format='%(asctime)s | %(levelname)-8s | %(message)s', datefmt='%H:%M:%S')
logger = logging.getLogger(__name__)

DEFAULT_SEED: List[Dict[str, Any]] = [
    {
        "id": "robin-williams",
        "name": "Robin Williams",
        "score": 0.05,
        "count": 1,
        "reason": "Decades of USO tours and quiet hospital visits.",
        "image_url": "https://upload.wikimedia.org/wikipedia/commons/0/05/Robin_Williams_2011a_%282%29.jpg",
    },
    {
        "id": "keanu-reeves",
        "name": "Keanu Reeves",
        "score": 0.08,
        "count": 1,
        "reason": "Famously gave away much of his film earnings to crew members.",
    },
    {
        "id": "dolly-parton",
        "name": "Dolly Parton",
        "score": 0.06,
        "count": 1,
        "reason": "Imagination Library has mailed children hundreds of millions of free books.",
    },
    {
        "id": "gordon-ramsay",
        "name": "Gordon Ramsay",
        "score": 0.48,
        "count": 1,
        "reason": "Screams at chefs on television, raises money for charity off it.",
    },
    {
        "id": "kanye-west",
        "name": "Kanye West",
        "score": 0.82,
        "count": 1,
        "reason": "A long run of public controversies.",
    },
]


def load_seed(path: Path) -> List[Dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of celebrities")
    return data


def seed(entries: List[Dict[str, Any]], dry_run: bool = False) -> Dict[str, int]:
    """Validate and insert entries. Returns counts of inserted/skipped/invalid."""
    from app.core.dependencies import get_celebrity_repository
    from app.core.exceptions import DuplicateEntityException
    from app.models.celebrity import CelebrityCreate

    store = None if dry_run else get_celebrity_repository()
    counts = {"inserted": 0, "skipped": 0, "invalid": 0}

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.error(f"[{i}] invalid seed entry {entry!r}: expected an object")
            counts["invalid"] += 1
            continue
        try:
            celebrity = CelebrityCreate(**entry)
        except (TypeError, ValidationError) as e:
            logger.error(f"[{i}] invalid seed entry {entry.get('name', '?')!r}: {e}")
            counts["invalid"] += 1
            continue

        if dry_run:
            logger.info(f"[{i}] would insert {celebrity.name} (score={celebrity.score}, count={celebrity.count})")
            counts["inserted"] += 1
            continue

        try:
            store.insert(celebrity)
        except DuplicateEntityException:
            logger.info(f"[{i}] {celebrity.name} ({celebrity.id}) already exists, skipping")
            counts["skipped"] += 1
            continue
        logger.info(f"[{i}] inserted {celebrity.name} ({celebrity.id})")
        counts["inserted"] += 1

    return counts


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the celebrity store")
    parser.add_argument("--file", type=Path, help="JSON file with a list of celebrities")
    parser.add_argument("--dry-run", action="store_true", help="Validate without writing")
    args = parser.parse_args(argv)

    entries = load_seed(args.file) if args.file else DEFAULT_SEED
    counts = seed(entries, dry_run=args.dry_run)
    logger.info(
        f"Done: {counts['inserted']} inserted, {counts['skipped']} skipped, "
        f"{counts['invalid']} invalid"
    )
    return 1 if counts["invalid"] else 0


if __name__ == "__main__":
    sys.exit(main())
