"""Exception hierarchy shared by services, repositories and endpoints."""

from __future__ import annotations


class FreightDeskError(Exception):
    """Base class for all application errors."""


class ValidationError(FreightDeskError, ValueError):
    """Malformed input: a charge figure, a date or a date range."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class CurrencyError(ValidationError):
    """Empty or structurally invalid currency code."""

    def __init__(self, code: object) -> None:
        self.code = code
        super().__init__("currency", f"Invalid currency code: {code!r}")


class NotFoundError(FreightDeskError):
    def __init__(self, resource: str, identifier: object) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ConflictError(FreightDeskError):
    pass


class UpstreamFetchError(FreightDeskError):
    """The order collaborator failed to deliver a snapshot."""


class ReportGenerationError(UpstreamFetchError):
    """A report could not be produced because its input could not be fetched."""


class RenderError(FreightDeskError):
    """Spreadsheet or XML serialisation failed."""

    def __init__(self, fmt: str, message: str) -> None:
        self.fmt = fmt
        super().__init__(f"Failed to render {fmt}: {message}")
