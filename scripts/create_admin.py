#!/usr/bin/env python3
"""Create an admin account, or reset the password and role of an existing one.

Usage:
    python scripts/create_admin.py --name "Principal" --email admin@school.in --password secret123 --role super_admin
"""
import argparse
import asyncio
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from school_admin.core.database import AsyncSessionLocal, close_db_connections  # noqa: E402
from school_admin.core.security import hash_password  # noqa: E402
from school_admin.models.admin import AdminRole  # noqa: E402
from school_admin.services.admin_service import AdminService  # noqa: E402


async def create_or_reset(name: str, email: str, password: str, role: AdminRole):
    async with AsyncSessionLocal() as session:
        service = AdminService(session)
        existing = await service.get_by_email(email)
        if existing is None:
            admin = await service.create_admin(name, email, password, role)
            print(f"✅ Created {admin.role.value} {admin.email}")
        else:
            await service.update(existing.id, {
                "password_hash": hash_password(password),
                "role": role,
                "is_active": True,
            })
            print(f"✅ Reset password for {existing.email} ({role.value})")
    await close_db_connections()


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--role", choices=[r.value for r in AdminRole], default=AdminRole.ADMIN.value)
    args = parser.parse_args()

    asyncio.run(create_or_reset(args.name, args.email, args.password, AdminRole(args.role)))


if __name__ == "__main__":
    main()
