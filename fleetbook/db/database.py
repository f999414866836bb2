"""
Database connection and session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Get settings from environment
database_url = os.getenv("DATABASE_URL", "sqlite:///./fleetbook.db")
sql_echo = _as_bool(os.getenv("SQL_ECHO", "false"))
export_dir = os.getenv("EXPORT_DIR", "./exports")
resource_backend = os.getenv("RESOURCE_BACKEND", "database")
resource_file = os.getenv("RESOURCE_FILE", "./resources.json")
sheet_sync_path = os.getenv("SHEET_SYNC_PATH", "")
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")


class Settings:
    database_url = database_url
    sql_echo = sql_echo
    export_dir = export_dir
    resource_backend = resource_backend
    resource_file = resource_file
    sheet_sync_path = sheet_sync_path
    cors_origins = [origin.strip() for origin in cors_origins.split(",") if origin.strip()]

settings = Settings()

# SQLite connections are handed between FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, echo=settings.sql_echo, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
