"""SQLAlchemy models."""
from models.base import Base
from models.bookmark import Bookmark

__all__ = ["Base", "Bookmark"]
