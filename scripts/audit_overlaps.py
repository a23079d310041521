import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
from typing import Optional, Sequence
from uuid import UUID

import structlog

from cabin_admin.core.availability import find_overlapping_pairs
from cabin_admin.db.engine import engine
from cabin_admin.db.readers.reservations import list_reservations
from cabin_admin.logging_config import setup_logging

setup_logging()
logger = structlog.get_logger(__name__)


def audit(cabin_id: Optional[UUID] = None) -> int:
    """
    Log every pair of active reservations that double-book a cabin.

    Returns:
        int: Number of overlapping pairs found (0 for a healthy dataset)
    """
    with engine.connect() as conn:
        reservations = list_reservations(conn, cabin_id=cabin_id, include_cancelled=False)

    pairs = find_overlapping_pairs(reservations)
    for first, second in pairs:
        logger.warning(
            "overlapping_reservations",
            cabin_id=first.cabin_id,
            first_id=first.id,
            first_range=f"{first.stay.start}..{first.stay.end}",
            second_id=second.id,
            second_range=f"{second.stay.start}..{second.stay.end}",
        )

    logger.info("overlap_audit_finished", reservations=len(reservations), overlapping_pairs=len(pairs))
    return len(pairs)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Report reservations that overlap on the same cabin.")
    parser.add_argument("--cabin", type=UUID, help="Only audit this cabin id")
    args = parser.parse_args(argv)

    if audit(args.cabin):
        sys.exit(1)


if __name__ == "__main__":
    main()
