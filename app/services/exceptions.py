"""Domain exceptions raised by the resume services."""

from typing import Optional


class ResumeStudioError(Exception):
    """Base class for all service-level errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(ResumeStudioError):
    """
    Raised when a caller supplies input a service cannot act on.

    Attributes:
        message: Error description
        field: Name of the offending input, if known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class _NotFoundError(ResumeStudioError):
    """Base for lookups of an identifier that does not exist."""

    kind = "Record"

    def __init__(self, identifier: str, message: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message or f"{self.kind} '{identifier}' not found")


class ResumeNotFoundError(_NotFoundError):
    kind = "Resume"


class ShareNotFoundError(_NotFoundError):
    kind = "Shared resume"


class EntryNotFoundError(_NotFoundError):
    kind = "Entry"
