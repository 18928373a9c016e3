"""
Create (or promote) an admin user with email/password credentials.
Usage: python create_admin.py <email> <name> [password]

The password is prompted for when not given on the command line.
"""
import getpass
import logging
import sys

from booking_api import models  # noqa: F401 - registers tables
from booking_api.config import DATABASE_URL
from booking_api.database import Base, build_engine, build_session_factory
from booking_api.domain.users.repository import UserRepository
from booking_api.security_utils import hash_password
from booking_api.shared.validators import validate_email

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def create_admin(email: str, name: str, password: str, database_url: str = DATABASE_URL):
    """Create the admin, or give an existing user with this email the admin role"""
    engine = build_engine(database_url)
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = build_session_factory(engine)()
    repo = UserRepository()
    try:
        user = repo.get_user_by_email(db, email)
        if user:
            user = repo.update_user(db, user, role="admin")
            logger.info(f"✅ Existing user {user.id} promoted to admin")
        else:
            user = repo.create_user(
                db,
                auth_provider="credentials",
                email=email,
                password_hash=hash_password(password),
                name=name,
                role="admin",
            )
            logger.info(f"✅ Admin {user.id} created")
        return user
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        logger.error("Usage: python create_admin.py <email> <name> [password]")
        sys.exit(1)

    try:
        admin_email = validate_email(sys.argv[1])
    except ValueError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    admin_password = sys.argv[3] if len(sys.argv) > 3 else getpass.getpass("Password: ")
    if not admin_password:
        logger.error("❌ Password must not be empty")
        sys.exit(1)

    try:
        create_admin(admin_email, sys.argv[2], admin_password)
    except Exception as e:
        logger.error(f"❌ Failed to create admin: {e}")
        sys.exit(1)
