"""
mutalyzer-ld: Linked Data front end for the Mutalyzer web service.

Architecture
============

* :mod:`.wrappers`: wraps the remote Mutalyzer SOAP service
* :mod:`.results`: flattening of remote results and detection of embedded errors
* :mod:`.negotiation`: choice of a representation from the caller's accepted media types
* :mod:`.formatters`: Turtle representations, either template-rendered or graph-built
* :mod:`.pipeline`: per-operation orchestration of the above
* :mod:`.api`: FastAPI application


"""
import importlib_metadata

try:
    __version__ = importlib_metadata.version(__name__)
except importlib_metadata.PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"  # pragma: no cover

from mutalyzer_ld.errors import (
    DomainError,
    MalformedResultError,
    MutalyzerLDError,
    NotAcceptableError,
    RemoteCallError,
    TemplateNotFoundError,
)
from mutalyzer_ld.pipeline import OperationPipeline

__all__ = [
    "OperationPipeline",
    "MutalyzerLDError",
    "DomainError",
    "MalformedResultError",
    "NotAcceptableError",
    "RemoteCallError",
    "TemplateNotFoundError",
]
