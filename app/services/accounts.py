"""Account store: lookups, registration, profile and password changes."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import hash_password, normalize_email, verify_password
from app.models import User
from app.schemas.auth import Role

logger = logging.getLogger(__name__)


class EmailTakenError(Exception):
    """Raised when an email is already registered to another account."""

    def __init__(self, email: str) -> None:
        self.message = "An account with this email already exists."
        super().__init__(f"{self.message} ({email})")


class InvalidPasswordError(Exception):
    """Raised by change_password when the current password does not match."""

    def __init__(self) -> None:
        self.message = "Current password is incorrect."
        super().__init__(self.message)


def find_by_id(db: Session, account_id: int) -> User | None:
    return db.get(User, account_id)


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def create_account(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: Role = Role.USER,
    bcrypt_rounds: int,
) -> User:
    """Create and commit a new account. Raises EmailTakenError on a duplicate email."""
    email = normalize_email(email)
    if find_by_email(db, email) is not None:
        raise EmailTakenError(email)
    user = User(
        email=email,
        password_hash=hash_password(password, rounds=bcrypt_rounds),
        first_name=first_name,
        last_name=last_name,
        role=role.value,
        email_verified=False,
    )
    db.add(user)
    _commit_email_change(db, email)
    db.refresh(user)
    logger.info("Account created: account_id=%s, role=%s", user.id, user.role)
    return user


def update_profile(
    db: Session,
    user: User,
    *,
    first_name: str,
    last_name: str,
    email: str,
) -> User:
    """Update names and email. Raises EmailTakenError if the email belongs to someone else."""
    email = normalize_email(email)
    if email != user.email:
        if _email_taken(db, email, exclude_id=user.id):
            raise EmailTakenError(email)
    user.first_name = first_name
    user.last_name = last_name
    user.email = email
    user.updated_at = datetime.now(UTC)
    _commit_email_change(db, email)
    db.refresh(user)
    return user


def change_password(
    db: Session,
    user: User,
    *,
    current_password: str,
    new_password: str,
    bcrypt_rounds: int,
) -> None:
    """The only path that mutates password_hash. Raises InvalidPasswordError on a wrong current password."""
    if not verify_password(current_password, user.password_hash):
        raise InvalidPasswordError()
    user.password_hash = hash_password(new_password, rounds=bcrypt_rounds)
    user.updated_at = datetime.now(UTC)
    db.commit()
    logger.info("Password changed: account_id=%s", user.id)


def list_accounts(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def directory(db: Session) -> list[User]:
    """All accounts ordered by name, for assignee pickers."""
    return db.query(User).order_by(User.first_name, User.last_name, User.id).all()


def _email_taken(db: Session, email: str, exclude_id: int) -> bool:
    return (
        db.query(User.id)
        .filter(User.email == email, User.id != exclude_id)
        .first()
        is not None
    )


def _commit_email_change(db: Session, email: str) -> None:
    # The unique index on users.email catches a claim made after the pre-check.
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailTakenError(email) from e
