"""
Post-commit delivery of domain events.

Events published through an EventPublisher are parked on the session and
only handed to the dispatcher once the session's transaction commits. A
rollback discards them, so listeners never observe uncommitted rows.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session, SessionTransaction

from loanapp.config import settings
from loanapp.core.exceptions import ConcurrentUpdateError
from loanapp.models.domain.events import ApproveLoanEvent
from loanapp.repositories.applicant_repository import ApplicantRepository
from loanapp.services.approval_listener import LoanApprovalListener

logger = logging.getLogger(__name__)

PENDING_EVENTS_KEY = "loanapp.pending_events"

# Failures worth another attempt in a fresh transaction
TRANSIENT_ERRORS = (ConcurrentUpdateError, OperationalError)


class ApprovalEventDispatcher:
    """
    In-process queue of committed approval events with a single worker task.

    Each event is handled in its own session. Transient failures are retried
    with exponential backoff; anything else is logged and the event dropped
    so one bad event cannot stall the queue.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            session_factory: Factory for the sessions events are handled in
            max_retries: Maximum number of attempts per event (defaults to settings)
            retry_delay: Initial delay between attempts in seconds (exponential backoff)
        """
        self.session_factory = session_factory
        self.max_retries = (
            max_retries if max_retries is not None else settings.APPROVAL_MAX_RETRIES
        )
        self.retry_delay = (
            retry_delay if retry_delay is not None else settings.APPROVAL_RETRY_DELAY
        )
        self._queue: "asyncio.Queue[ApproveLoanEvent]" = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None

    @property
    def pending(self) -> int:
        """Number of events waiting to be handled."""
        return self._queue.qsize()

    def enqueue(self, approve_event: ApproveLoanEvent) -> None:
        """Queue a committed event without blocking the caller."""
        self._queue.put_nowait(approve_event)

    def start(self) -> None:
        """Start the worker task on the running event loop."""
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(
                self._run(), name="approval-event-dispatcher"
            )
            logger.info("Approval event dispatcher started")

    async def stop(self) -> None:
        """Cancel the worker task; queued events are not handled."""
        if self._worker is None:
            return
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        if self.pending:
            logger.warning(f"Approval event dispatcher stopped with {self.pending} undelivered events")
        else:
            logger.info("Approval event dispatcher stopped")

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()

    async def _run(self) -> None:
        while True:
            approve_event = await self._queue.get()
            try:
                await self.dispatch(approve_event)
            except Exception:
                logger.error(
                    f"Dropping approval event for {approve_event.applicant_email}",
                    exc_info=True,
                )
            finally:
                self._queue.task_done()

    async def dispatch(self, approve_event: ApproveLoanEvent) -> None:
        """
        Handle one event in a new transaction, retrying transient failures.

        Args:
            approve_event: Committed approval event

        Raises:
            ConcurrentUpdateError: If the last attempt still conflicted
            OperationalError: If the database stayed unavailable
            ApplicantNotFoundError: If the applicant does not exist
        """
        for attempt in range(self.max_retries):
            try:
                async with self.session_factory() as session:
                    listener = LoanApprovalListener(ApplicantRepository(session))
                    await listener.handle(approve_event)
                    await session.commit()
                return

            except TRANSIENT_ERRORS as e:
                logger.warning(
                    f"Approval for {approve_event.applicant_email} failed on attempt "
                    f"{attempt + 1}: {e}"
                )
                if attempt < self.max_retries - 1:
                    delay = self.retry_delay * (2 ** attempt)  # Exponential backoff
                    logger.info(f"Retrying in {delay} seconds...")
                    await asyncio.sleep(delay)
                else:
                    logger.error("Max retries reached for approval event")
                    raise


class EventPublisher:
    """Publishes events bound to the current transaction of a session."""

    def __init__(self, session: AsyncSession, dispatcher: ApprovalEventDispatcher):
        self.session = session
        self.dispatcher = dispatcher

    def publish(self, approve_event: ApproveLoanEvent) -> None:
        """Deliver the event after the session's transaction commits."""
        pending = self.session.info.setdefault(PENDING_EVENTS_KEY, [])
        pending.append((self.dispatcher, approve_event))


@event.listens_for(Session, "after_commit")
def _release_pending_events(session: Session) -> None:
    for dispatcher, approve_event in session.info.pop(PENDING_EVENTS_KEY, []):
        dispatcher.enqueue(approve_event)


@event.listens_for(Session, "after_soft_rollback")
def _discard_pending_events(
    session: Session, previous_transaction: SessionTransaction
) -> None:
    # Only the outermost rollback ends the unit of work the events belong to
    if previous_transaction.parent is None:
        discarded = session.info.pop(PENDING_EVENTS_KEY, [])
        if discarded:
            logger.info(f"Discarded {len(discarded)} events after rollback")
