"""
Grant roles to existing users.

    python scripts/seed_roles.py admin@example.com [other@example.com ...]
    python scripts/seed_roles.py --role user someone@example.com
"""
import argparse
import logging
import sys
import os

# Ensure project root is in path
sys.path.append(os.getcwd())

from app.core.database import SessionLocal
from app.core.errors import CRMError
from app.core.logging_config import setup_logging
from app.services.user_service import UserService

logger = logging.getLogger("seed_roles")


def seed(emails, role):
    db = SessionLocal()
    failed = 0
    try:
        service = UserService(db)
        for email in emails:
            try:
                service.assign_role(email, role)
            except CRMError as e:
                db.rollback()
                failed += 1
                logger.error(f"{email}: {e.message}")
    finally:
        db.close()
    return failed


def main(argv=None):
    parser = argparse.ArgumentParser(description="Assign CRM roles to users by email")
    parser.add_argument("emails", nargs="+")
    parser.add_argument("--role", default="admin", choices=["admin", "user"])
    args = parser.parse_args(argv)

    setup_logging()
    return 1 if seed(args.emails, args.role) else 0


if __name__ == "__main__":
    sys.exit(main())
