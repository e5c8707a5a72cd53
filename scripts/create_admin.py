"""
Grant the admin role to an existing account.

The account must have signed in at least once so the user row exists.

Usage:
    python scripts/create_admin.py someone@unilag.edu.ng
    python scripts/create_admin.py someone@unilag.edu.ng --revoke
"""

import argparse
import asyncio
import sys
from datetime import UTC, datetime

from sqlalchemy import update

from talentnest.core.redis_client import CacheManager, get_redis_client
from talentnest.database import AsyncSessionLocal, engine
from talentnest.models.users import users
from talentnest.services.user_service import UserService


async def set_admin(email: str, revoke: bool = False) -> bool:
    """Set or clear the admin role for the user with ``email``."""
    role = "student" if revoke else "admin"

    async with AsyncSessionLocal() as db:
        user = await UserService().get_user_by_email(db, email)
        if not user:
            print(f"✗ No user with email {email}. Sign in once before promoting.", file=sys.stderr)
            return False

        await db.execute(
            update(users)
            .where(users.c.id == user["id"])
            .values(role=role, is_active=True, updated_at=datetime.now(UTC))
        )
        await db.commit()

    # Drop any cached copy so the new role applies to the next request
    UserService(CacheManager(get_redis_client())).invalidate(user["id"])
    await engine.dispose()

    print(f"✓ {email} is now {'no longer an admin' if revoke else 'an admin'}")
    return True


def main() -> None:
    """Parse arguments and run."""
    parser = argparse.ArgumentParser(description="Grant or revoke the TalentNest admin role")
    parser.add_argument("email", help="Email of an existing account")
    parser.add_argument("--revoke", action="store_true", help="Demote the account to student")
    args = parser.parse_args()

    if not asyncio.run(set_admin(args.email, revoke=args.revoke)):
        sys.exit(1)


if __name__ == "__main__":
    main()
