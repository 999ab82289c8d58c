"""
USER MANAGEMENT HELPER
Operator script for accounts in the configured backend (DATABASE_URL or
BACKEND_URL/BACKEND_API_KEY). Goes straight to the stores, no session needed.

Usage:
    python manage_users.py --list
    python manage_users.py --create "ada@example.com" "s3cret!" [--name "Ada Lovelace"] [--admin]
    python manage_users.py --promote "ada@example.com"
    python manage_users.py --demote "ada@example.com"
    python manage_users.py --seed
"""

import asyncio
import sys

from app.auth.passwords import hash_password
from app.auth.session import EMAIL_RE, placeholder_avatar
from app.config import get_settings
from app.errors import ServiceError
from app.mocks.seed import seed_stores
from app.schemas import UserRecord
from app.stores.factory import build_stores


async def list_users(stores):
    """List all users"""
    users = await stores.users.list()
    if not users:
        print("No users found.")
        return []

    print(f"\n{'Email':<32} {'Role':<8} {'Username':<20} {'Created':<20}")
    print("-" * 82)
    for u in users:
        created = u.created_at.strftime("%Y-%m-%d %H:%M") if u.created_at else "-"
        print(f"{u.email:<32} {u.role:<8} {u.username or '-':<20} {created:<20}")
    print()
    return users


async def create_user(stores, email, password, full_name=None, admin=False):
    """Create a new account"""
    if not EMAIL_RE.match(email or ""):
        print(f"Invalid email: {email}")
        return None
    if not password:
        print("Password is required")
        return None

    try:
        user = await stores.users.insert(
            UserRecord(
                email=email,
                password_hash=hash_password(password),
                role="admin" if admin else "user",
                full_name=full_name,
                avatar_url=placeholder_avatar(email),
            )
        )
    except ServiceError as e:
        print(f"Could not create {email}: {e.message}")
        return None

    print(f"Created {user.email} ({user.role}) as {user.id}")
    return user


async def set_role(stores, email, role):
    """Change an account's role"""
    user = await stores.users.find_one({"email": email})
    if not user:
        print(f"User '{email}' not found!")
        return None

    user = await stores.users.update(user.id, {"role": role})
    print(f"{user.email} is now {user.role}")
    return user


async def seed(stores):
    await seed_stores(stores)
    print("Demo data loaded (skipped if users already existed)")


async def run(argv):
    settings = get_settings()
    if settings.backend_mode == "mock":
        print("No persistent backend configured, changes would vanish on exit.")
        print("Set DATABASE_URL or BACKEND_URL/BACKEND_API_KEY first.")
        return 1

    stores = build_stores(settings)
    try:
        command = argv[0]
        if command == "--list":
            await list_users(stores)
        elif command == "--create":
            if len(argv) < 3:
                print('Usage: python manage_users.py --create <email> <password> [--name "Full Name"] [--admin]')
                return 1
            full_name = None
            if "--name" in argv and argv.index("--name") + 1 < len(argv):
                full_name = argv[argv.index("--name") + 1]
            if not await create_user(stores, argv[1], argv[2], full_name, admin="--admin" in argv):
                return 1
        elif command in ("--promote", "--demote"):
            if len(argv) < 2:
                print(f"Usage: python manage_users.py {command} <email>")
                return 1
            if not await set_role(stores, argv[1], "admin" if command == "--promote" else "user"):
                return 1
        elif command == "--seed":
            await seed(stores)
        else:
            print(f"Unknown command: {command}")
            print(__doc__)
            return 1
    finally:
        await stores.close()
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    sys.exit(asyncio.run(run(sys.argv[1:])))
