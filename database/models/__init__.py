from .base import Base
from .state import AppStateEntry
from .user import User

__all__ = [
    'Base',
    'AppStateEntry',
    'User',
]
