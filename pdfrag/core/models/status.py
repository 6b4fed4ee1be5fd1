"""Processing status state machine."""
from enum import Enum

from ..exceptions import InvalidStatusTransition


class ProcessingStatus(Enum):
    """Lifecycle of a document's processing pipeline."""
    UPLOADING = "uploading"
    PROCESSING = "processing"
    CHUNKING = "chunking"
    EMBEDDING = "embedding"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingStatus.COMPLETED, ProcessingStatus.FAILED)

    def can_transition_to(self, target: "ProcessingStatus") -> bool:
        if self.is_terminal:
            return False
        if target is ProcessingStatus.FAILED:
            return True
        return _NEXT.get(self) is target

    def transition_to(self, target: "ProcessingStatus") -> "ProcessingStatus":
        """Validate and return the target status.

        Raises:
            InvalidStatusTransition: If the state machine forbids the change.
        """
        if not self.can_transition_to(target):
            raise InvalidStatusTransition(
                f"Cannot move from {self.value} to {target.value}"
            )
        return target


_NEXT = {
    ProcessingStatus.UPLOADING: ProcessingStatus.PROCESSING,
    ProcessingStatus.PROCESSING: ProcessingStatus.CHUNKING,
    ProcessingStatus.CHUNKING: ProcessingStatus.EMBEDDING,
    ProcessingStatus.EMBEDDING: ProcessingStatus.COMPLETED,
}
