# db/seed/user_seeder.py
import logging
import os

from core.security import hash_password
from models.enums import UserRole
from models.user import User
from .base_seeder import BaseSeeder

logger = logging.getLogger(__name__)


class AdminSeeder(BaseSeeder):
    """Ensure the bootstrap administrator account exists with a known password."""

    def seed(self, username: str = None, password: str = None, name: str = None) -> User:
        username = username or os.getenv("ADMIN_USERNAME", "admin")
        password = password or os.getenv("ADMIN_PASSWORD")
        name = name or os.getenv("ADMIN_NAME", "Administrator")

        if not password:
            raise ValueError("ADMIN_PASSWORD not found in .env file")

        admin = self.upsert(
            User,
            lookup={"username": username},
            create={"name": name},
            update={
                "hashed_password": hash_password(password),
                "role": UserRole.admin,
                "is_active": True,
            },
        )

        logger.info(f"Seeded admin user {admin.username} (id={admin.id})")
        return admin
