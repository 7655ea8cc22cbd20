#!/usr/bin/env python3
"""
Seed the database with the admin account, initial site settings
and a default category. Credentials come from ADMIN_USERNAME / ADMIN_PASSWORD.
"""
import logging
import sys

from app.seed import seed_admin


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        seed_admin()
    except Exception as e:
        print(f"Error seeding admin: {e}")
        return 1
    print("Seeding completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
