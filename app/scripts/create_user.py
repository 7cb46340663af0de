"""
Create an account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import sys

from pydantic import EmailStr, TypeAdapter, ValidationError

from app.core.config import get_settings
from app.core.database import Database
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.auth import Role
from app.services.accounts import EmailTakenError, create_account

_email_adapter = TypeAdapter(EmailStr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Bizdesk account.")
    parser.add_argument("email", help="Email address (used to log in)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="user", choices=[r.value for r in Role])
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    args = parser.parse_args(argv)

    email = args.email.strip()
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    database = Database(settings)
    db = database.session()
    try:
        user = create_account(
            db,
            email=email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
            role=Role(args.role),
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
    except EmailTakenError:
        print(f"Account '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()
    print(f"Created account '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
