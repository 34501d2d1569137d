"""Route modules for the techNotes API."""
from . import auth, notes, users

__all__ = ["auth", "notes", "users"]
