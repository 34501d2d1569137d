"""SQLAlchemy models exposed for imports and schema creation."""
from .note import Note
from .user import Role, User

__all__ = ["Note", "Role", "User"]
