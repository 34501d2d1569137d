"""Async service functions operating on an AsyncSession."""
