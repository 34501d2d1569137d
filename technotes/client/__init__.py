"""Helpers for code running on the client side of the API."""
from .session_reader import SessionInfo, derive_session_info

__all__ = ["SessionInfo", "derive_session_info"]
