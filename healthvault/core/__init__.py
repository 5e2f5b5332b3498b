from .config import Settings, settings
from .database import create_db_engine, init_db

__all__ = ["Settings", "settings", "create_db_engine", "init_db"]
