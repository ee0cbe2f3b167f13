#!/usr/bin/env python3
"""
Script to change a user's role.
Usage: python make_admin.py someone@example.com [--role manager]
"""

import argparse
import sys

from app.db.database import SessionLocal
from app.domain.enums import UserRole
from app.infrastructure.orm.user_model import UserModel


def set_user_role(email: str, role: UserRole) -> bool:
    """Set the role of the user with ``email``."""
    db = SessionLocal()
    try:
        user = db.query(UserModel).filter(UserModel.email == email.strip().lower()).first()
        if not user:
            print(f"User with email '{email}' not found")
            return False

        user.role = role
        db.commit()
        print(f"User: {user.email}, Role: {role.value}")
        return True
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        return False
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Change a user's role")
    parser.add_argument("email", help="email of an existing user")
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.ADMIN.value,
        help="role to assign (default: admin)",
    )
    args = parser.parse_args(argv)
    return 0 if set_user_role(args.email, UserRole(args.role)) else 1


if __name__ == "__main__":
    sys.exit(main())
