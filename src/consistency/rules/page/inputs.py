from typing import List

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec
from ..grouping import INPUT_STYLE_KEYS, group_by_styles


@audit_spec(categories=["Inputs"])
def check_input_consistency(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """Rule: Form fields share one look, and text fields explain themselves with a placeholder."""
    inputs = snapshot.inputs
    res = []

    groups = group_by_styles(inputs, INPUT_STYLE_KEYS)
    if len(inputs) >= 2 and len(groups) > thresholds.style_group_count:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Inputs",
            message=f"{len(groups)} different input styles found on this page",
            detail="Inputs with inconsistent styling can confuse users about which fields are related.",
            url=snapshot.url,
        ))

    for field in inputs:
        if field.type == "text" and not field.placeholder:
            suffix = f" (#{field.id})" if field.id else ""
            res.append(Issue(
                severity=Severity.INFO,
                category="Inputs",
                message=f"Text input without placeholder{suffix}",
                detail="Placeholder text helps users understand what to enter.",
                url=snapshot.url,
            ))

    return res
