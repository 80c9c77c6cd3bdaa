"""Bootstrap the first admin account.

    python -m milkrun.seed_scripts.seed_admin

Reads ADMIN_EMAIL, ADMIN_PASSWORD and ADMIN_PHONE from the environment (or .env).
Running it again is safe: an existing admin keeps its row and gets its password reset.
"""
import asyncio
import os
from dotenv import load_dotenv

load_dotenv()

from milkrun.auth.utils import hash_password  # noqa: E402
from milkrun.common.utils import now  # noqa: E402
from milkrun.db.connection import async_engine, async_session, create_tables  # noqa: E402
from milkrun.schema.full_schema import Users, UserRole  # noqa: E402
from milkrun.user.repository import get_user_by_email  # noqa: E402
from milkrun.user.services import create_user  # noqa: E402


async def create_admin(email: str, password: str, phone: str, first_name: str = "Admin") -> Users:
    async with async_session() as session:
        user = await get_user_by_email(session, email)

        if user is None:
            user = await create_user(session, phone=phone, role=UserRole.ADMIN, email=email,
                                     password=password, first_name=first_name)
            print(f"Created admin public_id={user.public_id}")
            return user

        if user.role != UserRole.ADMIN.value:
            raise SystemExit(f"{email} already belongs to a {user.role} account")

        user.password_hash = hash_password(password)
        user.is_active = True
        user.updated_at = now()
        await session.commit()
        print(f"Admin exists public_id={user.public_id}, password reset")
        return user


async def main():
    admin_email = os.environ.get("ADMIN_EMAIL")
    admin_password = os.environ.get("ADMIN_PASSWORD")
    admin_phone = os.environ.get("ADMIN_PHONE")
    admin_name = os.environ.get("ADMIN_NAME", "Admin")

    if not admin_email or not admin_password or not admin_phone:
        raise SystemExit("Set ADMIN_EMAIL, ADMIN_PASSWORD and ADMIN_PHONE environment variables before running")

    await create_tables()
    try:
        await create_admin(admin_email, admin_password, admin_phone, admin_name)
    finally:
        await async_engine.dispose()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
