"""State Module - in-memory repositories and the application state that owns them."""
from core.state.repositories import CandidateRepository, JobRepository, Repositories, ScoreRepository
from core.state.app_state import AppState

__all__ = [
    'AppState',
    'Repositories',
    'JobRepository',
    'CandidateRepository',
    'ScoreRepository',
]
