"""Exception hierarchy for mutalyzer-ld."""
from typing import Iterable, Optional


class MutalyzerLDError(Exception):
    """Base exception for all mutalyzer-ld errors."""


class DomainError(MutalyzerLDError):
    """The remote service reported a fatal condition (an ``E``-prefixed message code)."""

    def __init__(self, code: str, text: str):
        super().__init__(f"{code}: {text}")
        self.code = code
        self.text = text


class MalformedResultError(MutalyzerLDError):
    """A remote result broke the single-entry wrapper contract."""

    def __init__(self, message: str, keys: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.keys = list(keys) if keys is not None else []


class NotAcceptableError(MutalyzerLDError):
    """None of the accepted media types can be produced by the operation."""

    def __init__(self, accepted: Iterable[str], available: Iterable[str]):
        self.accepted = list(accepted)
        self.available = list(available)
        super().__init__(
            f"None of {self.accepted} is supported; available: {', '.join(self.available)}"
        )


class TemplateNotFoundError(MutalyzerLDError):
    """A registered template could not be loaded at startup."""

    def __init__(self, name: str):
        super().__init__(f"Template not found: {name}")
        self.name = name


class RemoteCallError(MutalyzerLDError):
    """The remote call failed at the transport level or returned a SOAP fault."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
