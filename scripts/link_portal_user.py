"""Link a portal user to a member row and print a development session token.

Creates the portal_users table if needed (SQLite / fresh databases), then
inserts or updates the user.

Usage:
    PORTAL_LOCAL_MODE=1 python scripts/link_portal_user.py \
        --user-id usr_123 --email jane@example.com --member-id 42 [--name "Jane Doe"]
"""

import argparse
import asyncio

from memberportal.api.tokens import create_access_token
from memberportal.db.base import Base
from memberportal.db.engine import create_db_engine, create_session_factory
import memberportal.db.models  # noqa: F401  register all ORM models
from memberportal.repositories.portal_user_repo import PortalUserRepository


async def link(user_id: str, email: str, member_id: int, name: str | None) -> None:
    engine = create_db_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with create_session_factory(engine)() as session:
        repo = PortalUserRepository(session)
        user = await repo.get(user_id) or await repo.get_by_email(email)
        if user is None:
            user = await repo.create(user_id=user_id, email=email, display_name=name, member_id=member_id)
            print(f"Created portal user {user.user_id} -> member {member_id}")
        else:
            await repo.link_member(user, member_id)
            print(f"Linked portal user {user.user_id} -> member {member_id}")
        await session.commit()

    await engine.dispose()
    print()
    print("Bearer token:")
    print(create_access_token(user.user_id, email=user.email))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--user-id", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--member-id", type=int, required=True)
    parser.add_argument("--name", default=None)
    args = parser.parse_args()
    asyncio.run(link(args.user_id, args.email, args.member_id, args.name))


if __name__ == "__main__":
    main()
