#!/usr/bin/env python3
"""Create the root admin from ROOT_ADMIN_* when no admin exists yet.

    python scripts/seed_admin.py
"""
import os
import sys

from dotenv import load_dotenv

load_dotenv()
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from services.admin_service import seed_root_admin  # noqa: E402


def main() -> int:
    print("=== Seeding root admin ===\n")
    try:
        admin = seed_root_admin()
    except RuntimeError as e:
        print(f"ERROR: {e}")
        return 1
    if admin is None:
        print("Admins already exist; nothing to do.")
        return 0
    print(f"Created root admin: {admin['email']}")
    print(f"   Admin ID: {admin['id']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
