from typing import List, Sequence, Set

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, join_values, truncate
from ..grouping import (
    BUTTON_STYLE_KEYS,
    INPUT_STYLE_KEYS,
    SKELETON_STYLE_KEYS,
    distinct,
    style_signature,
)
from ..page.headings import heading_level

FONT_PREVIEW_LENGTH = 40
DRIFT_HEADING_LEVELS = (1, 2, 3)


def _signatures(elements, keys) -> Set[str]:
    return {style_signature(el, keys) for el in elements}


@audit_spec(categories=["Cross-Page: Buttons"])
def check_button_drift(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    res = []
    all_sigs: Set[str] = set()
    for snap in snapshots:
        all_sigs |= _signatures(snap.buttons, BUTTON_STYLE_KEYS)

    if len(all_sigs) > thresholds.cross_page_style_signatures:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Cross-Page: Buttons",
            message=f"{len(all_sigs)} different button styles found across {len(snapshots)} pages",
            detail=(
                "Button styles should be consistent across pages. "
                "Consider using a shared component or CSS class."
            ),
        ))
    return res


@audit_spec(categories=["Cross-Page: Inputs"])
def check_input_drift(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    res = []
    all_sigs: Set[str] = set()
    for snap in snapshots:
        all_sigs |= _signatures(snap.inputs, INPUT_STYLE_KEYS)

    if len(all_sigs) > thresholds.cross_page_style_signatures:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Cross-Page: Inputs",
            message=f"{len(all_sigs)} different input styles found across {len(snapshots)} pages",
            detail="Form inputs should look the same across your application for a coherent user experience.",
        ))
    return res


@audit_spec(categories=["Cross-Page: Headings"])
def check_heading_drift(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    """Rule: The top three heading levels keep one font size across the whole session."""
    res = []
    for level in DRIFT_HEADING_LEVELS:
        font_sizes = distinct(
            h.styles.get("fontSize")
            for snap in snapshots
            for h in snap.headings
            if heading_level(h.tag) == level
        )
        if len(font_sizes) > thresholds.heading_font_size_variants:
            res.append(Issue(
                severity=Severity.WARNING,
                category="Cross-Page: Headings",
                message=f"h{level} font size varies across pages: {join_values(font_sizes)}",
                detail=f"Heading level {level} should have a consistent font size across all pages.",
            ))
    return res


@audit_spec(categories=["Cross-Page: Typography"])
def check_font_family_sprawl(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    res = []
    families = distinct(
        el.styles.get("fontFamily")
        for snap in snapshots
        for elements in snap.elements.values()
        for el in elements
        if el.styles.get("fontFamily")
    )

    if len(families) > thresholds.font_family_count:
        listed = "; ".join(truncate(f, FONT_PREVIEW_LENGTH) for f in families)
        res.append(Issue(
            severity=Severity.INFO,
            category="Cross-Page: Typography",
            message=f"{len(families)} different font families used across pages",
            detail=f"Font families found: {listed}. Most designs use 1-2 font families.",
        ))
    return res


@audit_spec(categories=["Cross-Page: Loading States"])
def check_skeleton_drift(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    res = []
    with_skeletons = [s for s in snapshots if s.skeletons]
    if len(with_skeletons) < 2:
        return res

    all_sigs: Set[str] = set()
    for snap in with_skeletons:
        all_sigs |= _signatures(snap.skeletons, SKELETON_STYLE_KEYS)

    if len(all_sigs) > thresholds.skeleton_cross_page_signatures:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Cross-Page: Loading States",
            message=f"{len(all_sigs)} different skeleton styles found across {len(with_skeletons)} pages",
            detail="Loading placeholders should look consistent across all routes for a polished experience.",
        ))
    return res
