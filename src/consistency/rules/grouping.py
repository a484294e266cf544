from typing import Any, Dict, Hashable, Iterable, List, Sequence

# Style keys that define a visual treatment per element kind.
BUTTON_STYLE_KEYS = ("fontSize", "fontFamily", "borderRadius", "padding")
INPUT_STYLE_KEYS = ("fontSize", "border", "borderRadius", "padding")
SKELETON_STYLE_KEYS = ("backgroundColor", "borderRadius")

EMPTY_TOKEN = ""


def style_signature(element: Any, keys: Sequence[str]) -> str:
    """
    Pipe-joined style values of one element.
    Missing or None values collapse into the empty token so they still group.
    """
    styles = getattr(element, "styles", None) or {}
    return "|".join(
        EMPTY_TOKEN if styles.get(key) is None else str(styles.get(key))
        for key in keys
    )


def group_by_styles(elements: Iterable[Any], keys: Sequence[str]) -> Dict[str, List[Any]]:
    """
    Partitions elements by their style signature for the given keys.
    Groups keep the order in which each signature was first seen.
    """
    groups: Dict[str, List[Any]] = {}
    for element in elements:
        groups.setdefault(style_signature(element, keys), []).append(element)
    return groups


def distinct(values: Iterable[Hashable]) -> List[Hashable]:
    """Unique values in first-seen order."""
    return list(dict.fromkeys(values))
