"""HTTP service exposing the meeting digest workspace."""

from meeting_digest import __version__

__all__ = ["__version__"]
