from db.db import SessionLocal, engine, get_db
