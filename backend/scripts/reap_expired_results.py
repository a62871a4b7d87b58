"""Delete scoring results whose retention window has passed.

Expired results are already hidden from every read path; this job reclaims the
rows. Run it from cron or a scheduled task.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from essay_grader.errors import StorageError
from essay_grader.repositories import ScoringResultRepository

LOGGER = logging.getLogger("essay_grader.reaper")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete expired scoring results.")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON summary line instead of a plain message.",
    )
    return parser.parse_args(argv)


def reap(repository: Optional[ScoringResultRepository] = None) -> int:
    repository = repository or ScoringResultRepository()
    return repository.delete_expired()


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    args = parse_args(argv)
    try:
        deleted = reap()
    except (RuntimeError, StorageError) as exc:
        LOGGER.exception("Failed to reap expired results: %s", exc)
        return 1
    if args.json:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "deleted": deleted,
        }
        print(json.dumps(payload))
    else:
        LOGGER.info("Reaped %d expired scoring results.", deleted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
