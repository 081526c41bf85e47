from database.repositories.base import BaseRepository
from database.repositories.state import StateRepository
from database.repositories.user import UserRepository

__all__ = [
    'BaseRepository',
    'StateRepository',
    'UserRepository',
]
