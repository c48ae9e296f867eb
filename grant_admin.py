#!/usr/bin/env python3
"""
Grant the admin role to a user of the identity provider.

Users sign in at the identity provider; this script only records which subjects
may use the back-office, and prints a short-lived token for local development.
"""

import asyncio
import sys

from sqlalchemy import select

from charter.core.database import AsyncSessionLocal
from charter.core.security import create_access_token
from charter.models.user import AppRole, UserRoleAssignment


async def grant_admin_role() -> bool:
    print("🔧 Granting admin role for the yacht charter back-office")
    print("-" * 40)

    user_id = input("Enter the user id (token subject): ").strip()
    if not user_id:
        print("❌ User id cannot be empty")
        return False

    async with AsyncSessionLocal() as db:
        existing = await db.execute(
            select(UserRoleAssignment).where(
                UserRoleAssignment.user_id == user_id,
                UserRoleAssignment.role == AppRole.ADMIN,
            )
        )
        if existing.scalar_one_or_none() is not None:
            print(f"ℹ️  '{user_id}' already has the admin role")
        else:
            db.add(UserRoleAssignment(user_id=user_id, role=AppRole.ADMIN))
            await db.commit()
            print(f"✅ Admin role granted to '{user_id}'")

    print()
    print("Development access token (valid for the configured expiry):")
    print(create_access_token(user_id))
    return True


async def main():
    print("=" * 50)
    print("🛥️ YACHT CHARTER - ADMIN ROLE GRANT")
    print("=" * 50)
    print()

    try:
        success = await grant_admin_role()
    except KeyboardInterrupt:
        print("\n\n❌ Cancelled by user")
        sys.exit(1)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    asyncio.run(main())
