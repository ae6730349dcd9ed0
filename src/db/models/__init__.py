# SQLAlchemy models
from .base import Base
from .practice import PracticeSession

__all__ = [
    "Base",
    "PracticeSession",
]
