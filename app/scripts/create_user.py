"""
Create an account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password ADMIN
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from app.models.user import Role
from app.repositories.users import UserGateway


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Quill account.")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=Role.CLIENT.value, choices=[r.value for r in Role])
    parser.add_argument("--name", default=None, help="Display name")
    args = parser.parse_args()

    email = args.email.strip().lower()
    if not email or "@" not in email or len(email) > 255:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        users = UserGateway(db)
        if users.find_by_email(email):
            print(f"Account '{email}' already exists.", file=sys.stderr)
            return 1
        users.create(
            email=email,
            password_hash=hash_password(args.password),
            name=args.name,
            role=args.role,
        )
        print(f"Created account '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
