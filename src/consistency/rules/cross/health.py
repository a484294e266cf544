import math
from typing import List, Optional, Sequence

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, format_px, truncate


def median_tap_size(snapshot: Snapshot) -> Optional[float]:
    """
    Upper median of min(width, height) over buttons and links.
    Returns None when no interactive element has a positive size.
    """
    sizes = sorted(
        el.min_side for el in [*snapshot.buttons, *snapshot.links] if el.min_side > 0
    )
    if not sizes:
        return None
    return sizes[len(sizes) // 2]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# --- AUDIT RULES ---

@audit_spec(categories=["Cross-Page: Third Parties"])
def check_third_party_drift(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    res = []
    page_counts = [
        (s.url, len(s.third_party_resources))
        for s in snapshots
        if s.third_party_resources is not None
    ]
    if len(page_counts) < 2:
        return res

    counts = [count for _, count in page_counts]
    low, high = min(counts), max(counts)

    if high > 0 and high - low > thresholds.third_party_drift:
        low_url = next(url for url, count in page_counts if count == low)
        high_url = next(url for url, count in page_counts if count == high)
        res.append(Issue(
            severity=Severity.WARNING,
            category="Cross-Page: Third Parties",
            message=f"Third-party count varies widely: {low} to {high} across pages",
            detail=(
                f"Fewest ({low}): {truncate(low_url, 60)}; Most ({high}): {truncate(high_url, 60)}. "
                "Large variance may cause inconsistent performance and user experience across routes."
            ),
        ))
    return res


@audit_spec(categories=["Cross-Page: SPA Health"])
def check_dom_bloat(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    """
    Rule: The DOM should not keep growing across SPA navigations, and the most
    recent page should not retain a large share of hidden elements.
    """
    res = []
    with_stats = [s.dom_stats for s in snapshots if s.dom_stats is not None]
    if len(with_stats) < 2:
        return res

    counts = [stats.total_element_count for stats in with_stats]
    first, last = counts[0], counts[-1]
    monotonic = all(cur >= prev for prev, cur in zip(counts, counts[1:]))

    if (
        monotonic
        and len(counts) >= thresholds.dom_growth_min_samples
        and last > first * thresholds.dom_growth_ratio
    ):
        res.append(Issue(
            severity=Severity.WARNING,
            category="Cross-Page: SPA Health",
            message=(
                f"DOM size grew from {format_px(first)} to {format_px(last)} elements "
                f"across {len(counts)} navigations"
            ),
            detail=(
                "DOM element count is increasing with each navigation, suggesting old route views are "
                "not being unmounted. This can degrade performance over time."
            ),
        ))

    latest = with_stats[-1]
    if latest.total_element_count > 0:
        hidden = latest.hidden_element_count
        ratio = hidden / latest.total_element_count
        if ratio > thresholds.hidden_element_ratio and hidden > thresholds.hidden_element_min_count:
            res.append(Issue(
                severity=Severity.INFO,
                category="Cross-Page: SPA Health",
                message=(
                    f"{_round_half_up(ratio * 100)}% of DOM elements are hidden "
                    f"({format_px(hidden)} of {format_px(latest.total_element_count)})"
                ),
                detail="A large proportion of hidden elements may indicate retained but unmounted views in an SPA.",
            ))

    return res


@audit_spec(categories=["Cross-Page: Tap Targets"])
def check_tap_target_drift(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    res = []
    medians = [m for m in (median_tap_size(s) for s in snapshots) if m is not None]
    if len(medians) < 2:
        return res

    low, high = min(medians), max(medians)
    if low > 0 and high > 0 and high / low > thresholds.tap_target_drift_ratio:
        res.append(Issue(
            severity=Severity.INFO,
            category="Cross-Page: Tap Targets",
            message=(
                f"Median interactive element size varies widely: "
                f"{format_px(low)}px to {format_px(high)}px across pages"
            ),
            detail=(
                "Large variation in tap target sizes across routes may indicate inconsistent UI density "
                "or missing design tokens."
            ),
        ))
    return res
