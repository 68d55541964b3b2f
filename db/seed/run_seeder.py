# db/seed/run_seeder.py
import logging
from ..db import SessionLocal                 # relative import from db/db.py
from .user_seeder import AdminSeeder          # relative import in seed package

logging.basicConfig(level=logging.INFO)

def main():
    # SQLAlchemy 2.x style: context manager ensures close()
    with SessionLocal() as db:
        AdminSeeder(db).seed()

if __name__ == "__main__":
    main()
