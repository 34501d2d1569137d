"""techNotes: notes and users management backend."""

__version__ = "1.0.0"
