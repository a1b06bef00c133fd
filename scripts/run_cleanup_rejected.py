"""Run the rejected-entity cleanup once: delete rejected admins and rejected campuses.

Usage:
    python -m scripts.run_cleanup_rejected
Same sweep as the weekly scheduled job. Requires Firebase credentials in config.
"""

import asyncio
import sys

from smartcampus.api.v1.dependencies import run_cleanup_rejected
from smartcampus.infrastructure.firebase.client import close_firebase, init_firebase
from smartcampus.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Initialize Firebase, run one sweep, print the counts."""
    setup_logging()
    if not init_firebase():
        print(
            "Firebase not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH)",
            file=sys.stderr,
        )
        sys.exit(1)
    try:
        result = await run_cleanup_rejected()
    finally:
        await close_firebase()
    print(
        f"Deleted {result.deleted_admins} rejected admin(s) and "
        f"{result.deleted_campuses} rejected campus(es); "
        f"{result.cascaded_campuses} campus(es) removed because they lost their last admin"
    )


if __name__ == "__main__":
    asyncio.run(main())
