# src/consistency/engine.py
"""
Consistency engine.

Runs the single-page rules against one snapshot and the cross-page rules
against a session of snapshots. Both entry points are pure: inputs are never
modified and every call returns a freshly built list of issues, ordered by
rule declaration and then by element order.
"""
import logging
from typing import Any, Iterable, List, Optional, Sequence

from .model import Issue, Snapshot
from .rules.core import CrossPageRule, PageRule
from .rules.cross.health import check_dom_bloat, check_tap_target_drift, check_third_party_drift
from .rules.cross.navigation import (
    check_same_content_different_url,
    check_stale_route_metadata,
    check_url_param_duplication,
)
from .rules.cross.styles import (
    check_button_drift,
    check_font_family_sprawl,
    check_heading_drift,
    check_input_drift,
    check_skeleton_drift,
)
from .rules.page.buttons import check_button_consistency, check_role_button_accessibility
from .rules.page.headings import check_heading_hierarchy
from .rules.page.images import check_above_fold_lazy_images, check_hero_image_hints, check_image_accessibility
from .rules.page.inputs import check_input_consistency
from .rules.page.interaction import check_tap_targets
from .rules.page.layout import check_background_image_hero, check_overlay_blocking, check_skeleton_consistency
from .rules.page.links import check_link_consistency
from .rules.page.third_party import check_third_party_surface_area
from .thresholds import DEFAULT_THRESHOLDS, Thresholds

logger = logging.getLogger(__name__)

PAGE_RULES: Sequence[PageRule] = (
    check_button_consistency,
    check_input_consistency,
    check_heading_hierarchy,
    check_link_consistency,
    check_image_accessibility,
    check_above_fold_lazy_images,
    check_hero_image_hints,
    check_background_image_hero,
    check_overlay_blocking,
    check_skeleton_consistency,
    check_tap_targets,
    check_role_button_accessibility,
    check_third_party_surface_area,
)

CROSS_PAGE_RULES: Sequence[CrossPageRule] = (
    check_button_drift,
    check_input_drift,
    check_heading_drift,
    check_font_family_sprawl,
    check_stale_route_metadata,
    check_url_param_duplication,
    check_same_content_different_url,
    check_third_party_drift,
    check_dom_bloat,
    check_skeleton_drift,
    check_tap_target_drift,
)


def _run_rules(rules: Iterable, subject: Any, thresholds: Thresholds, label: str) -> List[Issue]:
    """
    Applies each rule in order and flattens the findings.
    A rule that raises is logged and contributes nothing; its siblings still run.
    """
    findings: List[Issue] = []
    for rule in rules:
        try:
            findings.extend(rule(subject, thresholds))
        except Exception as e:
            logger.error(f"Rule {rule.__name__} failed on {label}: {e}")
    return findings


def analyze_page(snapshot: Any, thresholds: Optional[Thresholds] = None) -> List[Issue]:
    """
    Runs the single-page rule battery on one snapshot.

    Args:
        snapshot: A Snapshot or the raw mapping produced by the extractor.
        thresholds: Heuristic limits; defaults to DEFAULT_THRESHOLDS.

    Returns:
        List[Issue]: Findings in rule declaration order.
    """
    snap = Snapshot.coerce(snapshot)
    limits = thresholds or DEFAULT_THRESHOLDS

    findings = _run_rules(PAGE_RULES, snap, limits, snap.url or "<unknown page>")
    logger.debug(f"Page audit of {snap.url}: {len(findings)} issues from {len(PAGE_RULES)} rules")
    return findings


def compare_snapshots(snapshots: Sequence[Any], thresholds: Optional[Thresholds] = None) -> List[Issue]:
    """
    Runs the cross-page rule battery on an ordered session of snapshots.

    Returns an empty list for fewer than two snapshots. Cross-page issues carry
    no url because they are not scoped to a single page.
    """
    if len(snapshots) < 2:
        return []

    snaps = [Snapshot.coerce(s) for s in snapshots]
    limits = thresholds or DEFAULT_THRESHOLDS

    findings = _run_rules(CROSS_PAGE_RULES, snaps, limits, f"{len(snaps)} snapshots")
    logger.debug(f"Cross-page audit of {len(snaps)} snapshots: {len(findings)} issues")
    return findings


def get_all_categories() -> List[str]:
    """
    Returns every issue category the engine can emit.
    Used by report consumers for configuration and filtering.
    """
    categories = set()
    for rule in (*PAGE_RULES, *CROSS_PAGE_RULES):
        categories.update(getattr(rule, "defined_categories", []))
    return sorted(categories)
