"""Status tracker protocol for the storage layer."""
from typing import Optional, Protocol, runtime_checkable

from ..models.status import ProcessingStatus


@runtime_checkable
class StatusTrackerProtocol(Protocol):
    """Receives processing status changes of a document."""

    async def update(
        self,
        document_id: str,
        status: ProcessingStatus,
        error_message: Optional[str] = None,
    ) -> None:
        """Record a status change.

        Args:
            document_id: Document identifier.
            status: New status.
            error_message: Failure message for the failed status.
        """
        ...
