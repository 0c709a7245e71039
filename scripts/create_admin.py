"""Create an operator account, or reset an existing one's password and role.

Usage:
    python scripts/create_admin.py <username> <password> [--role admin|super_admin]
"""
import argparse
import asyncio
import sys

sys.path.insert(0, ".")

from fluent_admin.config import get_settings
from fluent_admin.database import init_db
from fluent_admin.kernel.context import build_context
from fluent_admin.kernel.errors import AdminError
from fluent_admin.kernel.models.user import UserRole, UserStatus


async def main(username: str, password: str, role: UserRole) -> int:
    ctx = build_context(get_settings())
    try:
        await init_db(ctx.engine)
        async with ctx.session_maker() as session:
            async with session.begin():
                identity = ctx.identity_service(session)
                existing = await identity.get_user_by_username(username)
                if existing is None:
                    user = await identity.create_user(username, password, role=role)
                    print(f"Created {user.username} ({user.role.value})")
                else:
                    user = await identity.update_user(
                        existing.id,
                        password=password,
                        role=role,
                        status=UserStatus.ENABLED.value,
                    )
                    print(f"Reset {user.username} ({user.role.value})")
    except AdminError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        await ctx.dispose()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or reset an operator account")
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument(
        "--role",
        choices=[UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value],
        default=UserRole.ADMIN.value,
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.username, args.password, UserRole(args.role))))
