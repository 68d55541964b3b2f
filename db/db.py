from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.engine import make_url
from dotenv import load_dotenv
import logging
import os

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
APP_ENV = os.getenv("APP_ENV", "development")

if not DATABASE_URL:
    raise ValueError("DATABASE_URL not found in .env file")

# Safe DB URL for logging
url = make_url(DATABASE_URL)

connect_args = {"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}

if APP_ENV == "development":
    engine = create_engine(DATABASE_URL, echo=True, connect_args=connect_args)
    logger.info(f"[DEV] Connecting to DB: {url.render_as_string(hide_password=True)}")
else:
    engine = create_engine(DATABASE_URL, echo=False, pool_pre_ping=True, connect_args=connect_args)
    logger.info(f"[PROD] Connecting to DB: {url.render_as_string(hide_password=True)}")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
