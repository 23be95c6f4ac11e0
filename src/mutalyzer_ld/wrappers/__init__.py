"""Wrappers on top of the remote annotation service.

A wrapper performs one remote call per operation and returns the raw,
singleton-wrapped result.
"""

from mutalyzer_ld.wrappers.base_wrapper import RAW_RESULT, BaseWrapper
from mutalyzer_ld.wrappers.mutalyzer_wrapper import MutalyzerWrapper

__all__ = [
    "BaseWrapper",
    "MutalyzerWrapper",
    "RAW_RESULT",
    "get_wrapper",
]


def get_all_subclasses(cls):
    """Recursively get all subclasses of a given class."""
    direct_subclasses = cls.__subclasses__()
    return direct_subclasses + [
        s for subclass in direct_subclasses for s in get_all_subclasses(subclass)
    ]


def get_wrapper(name: str, **kwargs) -> BaseWrapper:
    for c in get_all_subclasses(BaseWrapper):
        if c.name == name:
            return c(**kwargs)
    raise ValueError(f"Unknown wrapper {name}, not found in {get_all_subclasses(BaseWrapper)}")

