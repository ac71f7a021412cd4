# API endpoints
from . import ai, filetree

__all__ = ["ai", "filetree"]
