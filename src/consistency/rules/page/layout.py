from typing import List

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, describe_element, format_size
from ..grouping import SKELETON_STYLE_KEYS, group_by_styles


@audit_spec(categories=["Layout: Performance"])
def check_background_image_hero(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """
    Rule: Hero regions should use <img> rather than CSS background-image.
    Candidates arrive pre-filtered by the extractor, so each one is reported.
    """
    res = []
    for candidate in snapshot.hero_candidates or []:
        label = describe_element(candidate.tag, candidate.id, candidate.first_class)
        size = format_size(candidate.dimensions.width, candidate.dimensions.height)
        res.append(Issue(
            severity=Severity.WARNING,
            category="Layout: Performance",
            message="Large above-fold element uses CSS background-image instead of <img>",
            detail=(
                f"{label} ({size}px) uses background-image. The browser discovers CSS background images "
                "later than <img> elements, delaying LCP."
            ),
            url=snapshot.url,
        ))
    return res


@audit_spec(categories=["UX: Render Blocking"])
def check_overlay_blocking(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """Rule: Nothing should hide the document or cover the viewport while interactive."""
    res = []

    bv = snapshot.body_visibility
    if bv is not None:
        if bv.body_opacity == "0" or bv.body_visibility == "hidden":
            res.append(Issue(
                severity=Severity.ERROR,
                category="UX: Render Blocking",
                message="Page body is hidden (opacity: 0 or visibility: hidden)",
                detail=(
                    "The page body is not visible. This may indicate a hydration gate, A/B test script, "
                    "or anti-flicker snippet blocking content render."
                ),
                url=snapshot.url,
            ))
        if bv.html_opacity == "0" or bv.html_visibility == "hidden":
            res.append(Issue(
                severity=Severity.ERROR,
                category="UX: Render Blocking",
                message="HTML root element is hidden",
                detail="The <html> element is not visible, blocking all content from rendering.",
                url=snapshot.url,
            ))

    for overlay in snapshot.overlays or []:
        if overlay.opacity == "0" or overlay.pointer_events == "none":
            continue
        label = overlay.tag + (f" #{overlay.id}" if overlay.id else "")
        size = format_size(overlay.dimensions.width, overlay.dimensions.height)
        res.append(Issue(
            severity=Severity.WARNING,
            category="UX: Render Blocking",
            message=f"Full-viewport overlay detected ({label})",
            detail=(
                f"A {overlay.position}-positioned element covers the viewport ({size}px, "
                f"z-index: {overlay.z_index}). This may block user interaction and delay perceived "
                "content visibility."
            ),
            url=snapshot.url,
        ))

    return res


@audit_spec(categories=["UX: Loading States"])
def check_skeleton_consistency(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    res = []
    skeletons = snapshot.skeletons or []
    if len(skeletons) < 2:
        return res

    groups = group_by_styles(skeletons, SKELETON_STYLE_KEYS)
    if len(groups) > thresholds.style_group_count:
        res.append(Issue(
            severity=Severity.INFO,
            category="UX: Loading States",
            message=f"{len(groups)} different skeleton/placeholder styles on this page",
            detail=(
                "Skeleton placeholders should have consistent colors and shapes "
                "for a polished loading experience."
            ),
            url=snapshot.url,
        ))
    return res
