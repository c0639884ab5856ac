#!/usr/bin/env python3
"""
Create (or promote) an administrator account for the DentalPortal admin panel.

Reads credentials from .env:
    ADMIN_EMAIL       admin account email (required)
    ADMIN_PASSWORD    admin account password (required)
    ADMIN_FIRST_NAME  optional, defaults to "Admin"
    ADMIN_LAST_NAME   optional, defaults to ""

Usage:
    python -m scripts.create_admin
"""
from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from sqlalchemy import select

from dentalportal.auth.utils import hash_password
from dentalportal.config import get_settings
from dentalportal.models.enums import UserRole
from dentalportal.models.user import User
from shared.database.postgres import get_async_session_factory


async def main() -> None:
    email = os.getenv("ADMIN_EMAIL", "").strip().lower()
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        print("Error: ADMIN_EMAIL and ADMIN_PASSWORD must be set in .env")
        sys.exit(1)

    session_factory = get_async_session_factory(get_settings().database_url)
    try:
        await _ensure_admin(session_factory, email, password)
    finally:
        await session_factory.kw["bind"].dispose()


async def _ensure_admin(session_factory, email: str, password: str) -> None:
    async with session_factory() as session:
        existing = (
            await session.execute(select(User).where(User.email == email))
        ).scalar_one_or_none()

        if existing is not None:
            print(f"User {email} already exists (id={existing.id}).")
            if existing.role != UserRole.ADMIN:
                existing.role = UserRole.ADMIN
                existing.is_email_verified = True
                await session.commit()
                print("  -> Promoted to admin.")
            else:
                print("  -> Already an admin. Nothing to do.")
            return

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=os.getenv("ADMIN_FIRST_NAME", "Admin"),
            last_name=os.getenv("ADMIN_LAST_NAME", ""),
            role=UserRole.ADMIN,
            is_email_verified=True,
            is_active=True,
        )
        session.add(user)
        await session.commit()
        print(f"Admin created: {email} (id={user.id})")


if __name__ == "__main__":
    asyncio.run(main())
