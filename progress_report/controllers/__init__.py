"""FastAPI routers acting as controllers in the MVC architecture."""

from . import analysis, curriculum

__all__ = ["analysis", "curriculum"]
