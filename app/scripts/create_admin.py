"""
Create an ADMIN user (there is no way to register one over HTTP). Run from project root:
  python -m app.scripts.create_admin EMAIL [--password PASSWORD]
The password is prompted for when omitted.
"""
import argparse
import getpass
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.core.security import CredentialHasher, is_strong_password, password_requirement_message
from app.models import Role
from app.schemas.auth import normalize_email
from app.services.user_directory import DuplicateEmailError, SqlAlchemyUserDirectory

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an admin user.")
    parser.add_argument("email", help="Admin email address")
    parser.add_argument("--password", help="Admin password (prompted when omitted)")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        email = normalize_email(args.email)
    except ValueError:
        logger.error("Provided email is invalid. Please provide a valid email address.")
        return 1
    password = args.password if args.password is not None else getpass.getpass("Enter admin password: ")
    if not is_strong_password(password, settings.PASSWORD_MIN_LENGTH):
        logger.error("Provided password is weak. %s", password_requirement_message(settings.PASSWORD_MIN_LENGTH))
        return 1

    db = SessionLocal()
    try:
        directory = SqlAlchemyUserDirectory(db)
        if directory.find_by_email(email) is not None:
            logger.error("User '%s' already exists.", email)
            return 1
        hasher = CredentialHasher(rounds=settings.BCRYPT_ROUNDS)
        try:
            admin = directory.create(email, hasher.hash(password), Role.ADMIN)
        except DuplicateEmailError:
            logger.error("User '%s' already exists.", email)
            return 1
        logger.info("Admin user created: id=%s email=%s", admin.id, admin.email)
        return 0
    except Exception as e:
        logger.exception("Error creating admin: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
