"""Grant the sysadmin role claim to an existing Firebase account.

Usage:
    python -m scripts.grant_sysadmin <email>
The account must sign in again (or refresh its ID token) to pick up the claim.
"""

import asyncio
import sys

from smartcampus.core.config import get_settings
from smartcampus.infrastructure.firebase.client import (
    close_firebase,
    get_identity_client,
    init_firebase,
)
from smartcampus.infrastructure.firebase.services import FirebaseIdentityGateway


async def main() -> None:
    """Set {role: <SYSADMIN_ROLE>} on the account for email."""
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.grant_sysadmin <email>", file=sys.stderr)
        sys.exit(1)
    email = sys.argv[1]

    if not init_firebase():
        print("Firebase not configured", file=sys.stderr)
        sys.exit(1)
    try:
        identity = FirebaseIdentityGateway(get_identity_client())
        uid = await identity.get_uid_by_email(email)
        if uid is None:
            print(f"No account for {email}", file=sys.stderr)
            sys.exit(1)
        role = get_settings().sysadmin_role
        await identity.set_custom_claims(uid, {"role": role})
        print(f"Granted role '{role}' to {email} (uid {uid})")
    finally:
        await close_firebase()


if __name__ == "__main__":
    asyncio.run(main())
