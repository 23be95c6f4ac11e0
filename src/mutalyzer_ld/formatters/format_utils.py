"""Helpers shared by the formatters."""
from typing import Any, Dict, Iterator, Mapping, Tuple, Union


def escape_dots(text: str) -> str:
    """
    Escape every literal dot, as required for dots in Turtle local names.

    >>> escape_dots("NM_003002.2")
    'NM_003002\\\\.2'

    :param text:
    :return:
    """
    return text.replace(".", "\\.")


def escape_leaves(obj: Any) -> Any:
    """
    Deep copy a structure, escaping dots in every string leaf.

    Non-string leaves are returned unchanged.

    :param obj:
    :return:
    """
    if isinstance(obj, str):
        return escape_dots(obj)
    if isinstance(obj, Mapping):
        return {k: escape_leaves(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [escape_leaves(v) for v in obj]
    return obj


def merge_params(params: Mapping[str, Any], result: Mapping[str, Any]) -> Dict[str, Any]:
    """Request parameters overlaid by the normalized result."""
    return {**params, **result}


def iter_fields(obj: Any) -> Iterator[Tuple[Union[str, int], Any]]:
    """
    Walk a structure depth first, yielding ``(key, value)`` for every entry.

    Each pair is yielded before the walk descends into its value;
    list items are yielded with their position as key.

    :param obj:
    :return:
    """
    if isinstance(obj, Mapping):
        items = obj.items()
    elif isinstance(obj, (list, tuple)):
        items = enumerate(obj)
    else:
        return
    for key, value in items:
        yield key, value
        yield from iter_fields(value)
