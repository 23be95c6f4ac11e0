"""Content negotiation.

Each operation declares the representations it can produce, in order of
its own preference. The caller's ``Accept`` header is turned into an
ordered list of media ranges and the first range the operation supports
wins.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence

from mutalyzer_ld.errors import NotAcceptableError

logger = logging.getLogger(__name__)

JSON = "application/json"
TURTLE = "text/turtle"


class RepresentationKind(str, Enum):
    PASS_THROUGH = "pass_through"
    TEMPLATE = "template"
    GRAPH = "graph"


@dataclass(frozen=True)
class Representation:
    """One serialized form an operation can produce."""

    kind: RepresentationKind
    media_type: str
    name: Optional[str] = None
    """Template or graph name; unused for pass-through."""

    @classmethod
    def pass_through(cls, media_type: str = JSON) -> "Representation":
        return cls(RepresentationKind.PASS_THROUGH, media_type)

    @classmethod
    def template(cls, name: str, media_type: str = TURTLE) -> "Representation":
        return cls(RepresentationKind.TEMPLATE, media_type, name)

    @classmethod
    def graph(cls, name: str, media_type: str = TURTLE) -> "Representation":
        return cls(RepresentationKind.GRAPH, media_type, name)


def _matches(media_range: str, media_type: str) -> bool:
    if media_range == "*/*":
        return True
    range_type, _, range_subtype = media_range.partition("/")
    main_type, _, subtype = media_type.partition("/")
    if range_subtype == "*":
        return range_type == main_type
    return media_range == media_type


def parse_accept(header: Optional[str]) -> List[str]:
    """
    Parse an ``Accept`` header into media ranges, most preferred first.

    Ranges with equal quality keep their header order; ``q=0`` ranges are dropped.

    >>> parse_accept("application/json;q=0.5, text/turtle")
    ['text/turtle', 'application/json']

    :param header:
    :return:
    """
    if header is None or not header.strip():
        return ["*/*"]
    ranked = []
    for position, part in enumerate(header.split(",")):
        fields = [f.strip() for f in part.split(";")]
        media_range = fields[0].lower()
        if not media_range:
            continue
        quality = 1.0
        for param in fields[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    logger.debug(f"Ignoring malformed quality in {part!r}")
        if quality <= 0:
            continue
        ranked.append((-quality, position, media_range))
    return [media_range for _, _, media_range in sorted(ranked)]


def select(accepted: Sequence[str], available: Sequence[Representation]) -> Representation:
    """
    Pick the representation for the first accepted media type the operation supports.

    :param accepted: media types (or ranges) in the caller's order of preference
    :param available: representations the operation can produce, in its own order
    :return:
    :raises NotAcceptableError: if nothing matches
    """
    for media_range in accepted:
        media_range = media_range.strip().lower()
        for representation in available:
            if _matches(media_range, representation.media_type):
                logger.debug(f"Negotiated {representation.media_type} from {media_range}")
                return representation
    raise NotAcceptableError(accepted, [r.media_type for r in available])


@dataclass
class ContentSelector:
    """Negotiates against a fixed operation to representations table."""

    representations: Mapping[str, Sequence[Representation]]

    def available(self, operation: str) -> List[Representation]:
        return list(self.representations[operation])

    def select(self, operation: str, accepted: Sequence[str]) -> Representation:
        return select(accepted, self.available(operation))
