"""Repository for applicant data access with specialized queries."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loanapp.core.exceptions import DuplicateApplicantError
from loanapp.models.domain.applicant import Applicant
from loanapp.repositories.base import BaseRepository


class ApplicantRepository(BaseRepository[Applicant]):
    """
    Repository for Applicant with email lookups and creation-ordered paging.

    The owned loan is loaded eagerly through the relationship's selectin
    strategy, so returned applicants can be inspected outside a greenlet.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the applicant repository.

        Args:
            db: Async database session
        """
        super().__init__(Applicant, db)

    async def exists_by_email(self, email: str) -> bool:
        """Return True if an applicant is registered under this email."""
        return await self.exists_by(email=email)

    async def find_by_email(self, email: str) -> Optional[Applicant]:
        """Retrieve an applicant by email, or None if not registered."""
        return await self.find_one_by(email=email)

    async def find_by_id(self, applicant_id: UUID) -> Optional[Applicant]:
        """Retrieve an applicant by its public UUID, or None if not found."""
        return await self.get_by_id(applicant_id)

    async def find_page(
        self,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Applicant], int]:
        """
        Retrieve a page of applicants ordered by creation time, oldest first.

        The internal primary key breaks ties between rows created within
        the same timestamp so pages stay stable.

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Tuple of (applicants on the page, total number of applicants)
        """
        return await self.get_page(
            skip=offset,
            limit=limit,
            order_by=(Applicant.created_at.asc(), Applicant.pk.asc()),
        )

    async def save(self, instance: Applicant) -> Applicant:
        """
        Insert or update an applicant.

        Raises:
            DuplicateApplicantError: If another applicant already owns the email
            ConcurrentUpdateError: If the applicant changed since it was read
        """
        try:
            return await super().save(instance)
        except IntegrityError as e:
            # Unique violations name the column (sqlite) or the constraint (postgres)
            if "email" in str(e.orig).lower():
                raise DuplicateApplicantError(
                    "You are an already registered applicant"
                ) from e
            raise
