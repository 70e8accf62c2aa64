class DocumentValidationError(Exception):
    """Raised when an upload is rejected before a record is created."""


class UnsupportedContentKindError(DocumentValidationError):
    """Raised when an upload has a content type outside the accepted set."""


class PayloadTooLargeError(DocumentValidationError):
    """Raised when an upload exceeds the configured size ceiling."""


class DocumentStoreError(Exception):
    """Base exception for document store contract violations."""


class InvalidStageTransitionError(DocumentStoreError):
    """Raised when a record would move to a stage the state machine forbids."""


class DetectionResultAlreadySetError(DocumentStoreError):
    """Raised when a detection result is attached to a record twice."""
