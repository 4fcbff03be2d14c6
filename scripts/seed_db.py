"""
Seed default departments into the mock DB or Firestore.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured DB: python scripts/seed_db.py --apply
  - Force mock DB even if Firebase is configured: python scripts/seed_db.py --apply --force-mock

Behavior:
  - Writes every entry of DEFAULT_DEPARTMENTS whose ID is not stored yet.
  - The store comes from app.config.firebase.get_store(), which returns the
    mock DB or Firestore depending on settings.
"""

import argparse

from app.config import firebase
from app.core.settings import settings
from app.models.department import DEFAULT_DEPARTMENTS
from app.services.department_service import DepartmentService


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to the DB instead of dry-run")
    parser.add_argument("--force-mock", action="store_true", help="Force use of mock DB even if Firebase configured")
    args = parser.parse_args()

    if args.force_mock:
        print("Forcing mock DB usage for this run.")
        settings.USE_MOCK_DB = True
        firebase.set_store(None)

    service = DepartmentService(firebase.get_store())

    if not args.apply:
        for department in DEFAULT_DEPARTMENTS:
            print(f"Preparing: departments/{department['id']} ({department['name']})")
        print("Dry run complete. Re-run with --apply to write to DB.")
        return

    created = service.seed_defaults()
    for department_id in created:
        print(f"Wrote: departments/{department_id}")
    print(f"Seeding completed ({len(created)} new, {len(DEFAULT_DEPARTMENTS) - len(created)} already present).")


if __name__ == "__main__":
    main()
