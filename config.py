import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "mehendi-studio-secret-key-change-me")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Row store for the "local" backend
    DATABASE_URL = os.getenv("DATABASE_URL")

    if DATABASE_URL:
        # Render hands out postgres:// but SQLAlchemy needs postgresql://
        if DATABASE_URL.startswith("postgres://"):
            DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = DATABASE_URL
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + os.path.join(BASE_DIR, "instance", "app.db")

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "local" (SQLAlchemy + filesystem) or "supabase"
    MEHENDI_BACKEND = os.getenv("MEHENDI_BACKEND", "local")

    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

    # Object storage
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "gallery")
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(BASE_DIR, "uploads"))
    PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB
    MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MB

    # A failed usage scan keeps the old image unless this is turned off
    USAGE_SCAN_ASSUME_IN_USE = _env_flag("USAGE_SCAN_ASSUME_IN_USE", True)

    # Snapshot of the admin mirror (categories, products, contacts, login)
    SNAPSHOT_FOLDER = os.getenv("SNAPSHOT_FOLDER", os.path.join(BASE_DIR, "instance", "snapshot"))

    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@mehendi.studio")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
