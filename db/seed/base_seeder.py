# db/seed/base_seeder.py
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

class BaseSeeder:
    def __init__(self, db: Session):
        self.db = db

    def upsert(self, model, lookup: dict, create: dict = None, update: dict = None):
        """
        Find a row by `lookup` (passed to filter_by) and apply `update` to it,
        or insert {**create, **update, **lookup} when it does not exist yet.
        """
        instance = self.db.query(model).filter_by(**lookup).first()

        if instance is None:
            instance = model(**{**(create or {}), **(update or {}), **lookup})
            self.db.add(instance)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                # Lost a race against a concurrent insert, update theirs instead
                instance = self.db.query(model).filter_by(**lookup).first()
                if instance is None:
                    raise
            else:
                self.db.refresh(instance)
                logger.debug(f"Created {model.__name__} {lookup}")
                return instance

        for field, value in (update or {}).items():
            setattr(instance, field, value)
        self.db.commit()
        self.db.refresh(instance)
        logger.debug(f"Updated {model.__name__} {lookup}")
        return instance
