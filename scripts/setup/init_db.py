"""
Initialize database — creates all tables and optionally seeds chambers.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed A B C --capacity 6]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from mortuary.config import settings
from mortuary.database import Database
from mortuary.exceptions import DuplicateError
from mortuary.services import chamber_service


def main():
    parser = argparse.ArgumentParser(description="Create tables and seed chambers")
    parser.add_argument("--seed", nargs="*", default=[], metavar="LETTER",
                        help="chamber names to create, e.g. A B C")
    parser.add_argument("--capacity", type=int, default=6, help="units per seeded chamber")
    args = parser.parse_args()

    print("Mortuary DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    database = Database(settings.DATABASE_URL)
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except SQLAlchemyError as e:
        print(f"Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        sys.exit(1)

    print("\nCreating tables...")
    database.create_tables()
    tables = sorted(inspect(database.engine).get_table_names())
    print(f"Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    if args.seed:
        print(f"\nSeeding chambers with {args.capacity} units each...")
        db = database.session()
        try:
            for name in args.seed:
                name = name.upper()
                if len(name) != 1 or not ("A" <= name <= "Z"):
                    print(f"   ! skipped '{name}': chamber names are single letters A-Z")
                    continue
                try:
                    chamber_service.create_chamber(db, name, args.capacity)
                    print(f"   + chamber {name}")
                except DuplicateError:
                    print(f"   = chamber {name} already exists")
        finally:
            db.close()

    database.dispose()
    print("\nDatabase ready! You can now start the backend:")
    print(f"   uvicorn mortuary.main:app --host {settings.BACKEND_HOST} --port {settings.BACKEND_PORT}")


if __name__ == "__main__":
    main()
