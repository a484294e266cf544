from typing import Callable, List, Sequence

from ..model import Issue, Snapshot
from ..thresholds import Thresholds

# Single-page rules receive one snapshot, cross-page rules the whole session.
PageRule = Callable[[Snapshot, Thresholds], List[Issue]]
CrossPageRule = Callable[[Sequence[Snapshot], Thresholds], List[Issue]]


def audit_spec(categories: List[str]):
    """
    Decorator to declare which issue categories a rule function emits.
    Lets the engine publish the full category list without running any rule.
    """
    def decorator(func):
        func.defined_categories = categories
        return func
    return decorator


def truncate(value: str, limit: int) -> str:
    return (value or "")[:limit]


def format_px(value: float) -> str:
    """Renders 44.0 as '44' and 43.5 as '43.5'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_size(width: float, height: float) -> str:
    return f"{format_px(width)}×{format_px(height)}"


def join_values(values: Sequence) -> str:
    return ", ".join("" if v is None else str(v) for v in values)


def describe_element(tag: str, element_id: str = "", first_class: str = "") -> str:
    """Builds '<div> #id .class' style labels used in issue messages."""
    label = f"<{tag}>"
    if element_id:
        label += f" #{element_id}"
    if first_class:
        label += f" .{first_class}"
    return label
