#!/usr/bin/env python3
"""
Script to remove every donor record from the database.

⚠️  WARNING: This is a destructive operation that cannot be undone!

Usage: python scripts/reset_database.py
       python scripts/reset_database.py --confirm  # Skip confirmation prompt
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import delete, func, select
from app.database.database import SessionLocal
from app.models.donor import Donor


def reset_database(skip_confirmation: bool = False) -> int:
    """
    Delete all donors.

    Args:
        skip_confirmation: If True, skip the confirmation prompt

    Returns:
        Number of donor rows deleted
    """
    db = SessionLocal()

    try:
        donor_count = db.scalar(select(func.count()).select_from(Donor))

        print("=" * 60)
        print(f"Donors: {donor_count}")
        print("=" * 60)

        if donor_count == 0:
            print("✅ Database is already empty. Nothing to reset.")
            return 0

        if not skip_confirmation:
            print("\n⚠️  WARNING: This will PERMANENTLY DELETE all donor records!")
            response = input("\n   Are you absolutely sure you want to proceed? (type 'RESET' to confirm): ")
            if response != "RESET":
                print("❌ Operation cancelled")
                return 0

        donors_deleted = db.execute(delete(Donor)).rowcount
        db.commit()

        print(f"✅ Deleted {donors_deleted} donor record(s)")
        return donors_deleted

    except Exception as e:
        db.rollback()
        print(f"\n❌ Error during database reset: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    skip_confirmation = "--confirm" in sys.argv or "-y" in sys.argv

    try:
        reset_database(skip_confirmation=skip_confirmation)
    except KeyboardInterrupt:
        print("\n\n❌ Operation cancelled by user")
        sys.exit(1)
    except Exception:
        sys.exit(1)
