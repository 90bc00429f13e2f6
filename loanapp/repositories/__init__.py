from .base import BaseRepository
from .applicant_repository import ApplicantRepository

__all__ = [
    "BaseRepository",
    "ApplicantRepository",
]
