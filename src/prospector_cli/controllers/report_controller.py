import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from consistency.engine import analyze_page, compare_snapshots, get_all_categories
from consistency.model import Issue, Severity, Snapshot
from consistency.thresholds import Thresholds
from prospector_cli.model import IssueEntry, PageEntry, Recommendation, Report, ReportSummary

logger = logging.getLogger(__name__)

BASE_RECOMMENDATIONS = [
    Recommendation(
        title="Adopt ESLint (JavaScript/TypeScript)",
        details=(
            "Use ESLint with accessibility plugins (jsx-a11y for React) to catch common a11y and "
            "consistency issues during development."
        ),
        link="https://eslint.org/",
    ),
    Recommendation(
        title="Use an Accessibility Checker",
        details="Run axe DevTools or Lighthouse to audit color contrast, ARIA, and structural accessibility problems.",
        link="https://www.deque.com/axe/devtools/",
    ),
    Recommendation(
        title="Add Pre-commit Hooks",
        details="Use lint-staged + husky to run linters before commits for early feedback.",
        link="https://github.com/okonet/lint-staged",
    ),
]

# (category substrings that trigger it, recommendation)
TOPIC_RECOMMENDATIONS: List[Tuple[Tuple[str, ...], Recommendation]] = [
    (("Headings",), Recommendation(
        title="Heading Hierarchy Guidelines",
        details=(
            "Ensure a single h1 per page and avoid skipping levels (e.g., h2 after h1, then h3). "
            "Consider lint rules in your framework or content guidelines."
        ),
        link="https://web.dev/heading-order/",
    )),
    (("Images",), Recommendation(
        title="Image Alt Text Checks",
        details="Require non-empty alt text for meaningful images. Consider CI checks using axe or similar.",
        link="https://webaim.org/techniques/alttext/",
    )),
    (("Buttons", "Inputs"), Recommendation(
        title="Standardize Buttons and Inputs",
        details="Adopt a shared UI component library or design tokens for fonts, radii, padding, and colors.",
        link="https://material.io/components?platform=web",
    )),
    (("Images: Performance", "Layout: Performance"), Recommendation(
        title="Optimize LCP Images",
        details=(
            'Use <img> with fetchpriority="high" for hero images. Avoid loading="lazy" on above-the-fold '
            "content. Prefer <img> over CSS background-image for LCP candidates."
        ),
        link="https://web.dev/articles/optimize-lcp",
    )),
    (("Render Blocking",), Recommendation(
        title="Remove Render-Blocking Overlays",
        details=(
            "Full-viewport overlays and hidden body/html block content visibility. Review anti-flicker "
            "snippets, A/B test loaders, and hydration gates."
        ),
        link="https://web.dev/articles/optimize-lcp#optimize_render_delay",
    )),
    (("Tap Targets",), Recommendation(
        title="Increase Tap Target Sizes",
        details=(
            "Interactive elements should be at least 44×44px per WCAG 2.5.8. "
            "Use min-width/min-height or padding to meet the threshold."
        ),
        link="https://web.dev/articles/accessible-tap-targets",
    )),
    (("Accessibility",), Recommendation(
        title="Add Accessible Names to Interactive Elements",
        details=(
            'Icon-only buttons and role="button" elements need aria-label or title. '
            'Ensure custom buttons are focusable with tabindex="0".'
        ),
        link="https://www.w3.org/WAI/ARIA/apg/patterns/button/",
    )),
    (("Third Parties",), Recommendation(
        title="Audit Third-Party Scripts",
        details=(
            "Each third-party origin adds DNS lookup and connection overhead. Audit and remove unused "
            "scripts; consider self-hosting critical resources."
        ),
        link="https://web.dev/articles/optimizing-content-efficiency-loading-third-party-javascript",
    )),
    (("SPA Navigation", "SPA Health"), Recommendation(
        title="Improve SPA Navigation Hygiene",
        details=(
            "Update document.title and h1 on route changes. Unmount old route views to prevent DOM bloat. "
            "Consider the View Transitions API for smoother navigation."
        ),
        link="https://developer.chrome.com/docs/web-platform/view-transitions",
    )),
    (("URL Hygiene", "Content Duplication"), Recommendation(
        title="Clean Up URL Parameters",
        details=(
            "Strip tracking parameters client-side and use canonical URLs. Consider implementing "
            "No-Vary-Search headers to improve prefetch cache hit rates."
        ),
        link="https://developer.chrome.com/docs/web-platform/no-vary-search",
    )),
    (("Loading States",), Recommendation(
        title="Standardize Loading Placeholders",
        details=(
            "Use consistent skeleton/shimmer styles (color, border-radius, animation) across all routes "
            "via shared CSS classes or design tokens."
        ),
        link="https://web.dev/articles/ux-basics",
    )),
]


def summarize(issues: Sequence[Issue], total_pages: int = 0) -> ReportSummary:
    """Counts issues per severity."""
    counts = Counter(issue.severity for issue in issues)
    return ReportSummary(
        total_pages=total_pages,
        total_issues=len(issues),
        errors=counts[Severity.ERROR],
        warnings=counts[Severity.WARNING],
        info=counts[Severity.INFO],
    )


def group_by_category(issues: Sequence[Issue]) -> Dict[str, List[Issue]]:
    groups: Dict[str, List[Issue]] = {}
    for issue in issues:
        groups.setdefault(issue.category, []).append(issue)
    return groups


def build_recommendations(issues: Sequence[Issue]) -> List[Recommendation]:
    """
    Base recommendations plus topic advice triggered by substring matches on
    the categories of the current issues.
    """
    categories = {issue.category for issue in issues}
    recs = list(BASE_RECOMMENDATIONS)
    for triggers, rec in TOPIC_RECOMMENDATIONS:
        if any(trigger in category for category in categories for trigger in triggers):
            recs.append(rec)
    return recs


def filter_issues(
        issues: Sequence[Issue],
        min_severity: Optional[Severity] = None,
        categories: Optional[Sequence[str]] = None
) -> List[Issue]:
    """Keeps issues at or above `min_severity` and, if given, within `categories`."""
    unknown = set(categories or []) - set(get_all_categories())
    if unknown:
        logger.warning("Filtering on unknown categories: %s", ", ".join(sorted(unknown)))

    result = []
    for issue in issues:
        if min_severity is not None and issue.severity.urgency < min_severity.urgency:
            continue
        if categories and issue.category not in categories:
            continue
        result.append(issue)
    return result


def _page_entry(snapshot: Snapshot) -> PageEntry:
    scanned_at = None
    if snapshot.timestamp is not None:
        try:
            scanned_at = datetime.fromtimestamp(snapshot.timestamp / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Unusable timestamp on %s: %s", snapshot.url, snapshot.timestamp)

    return PageEntry(
        url=snapshot.full_url or snapshot.url,
        title=snapshot.title,
        scanned_at=scanned_at,
        framework=snapshot.framework,
        is_spa=snapshot.is_spa,
        element_counts={category: len(els) for category, els in snapshot.elements.items()},
    )


class ReportController:
    """
    Orchestrates an analysis session: runs the engine over the snapshots and
    assembles the exportable report.
    """

    def __init__(self, thresholds: Optional[Thresholds] = None):
        self.thresholds = thresholds

    def run(
            self,
            snapshots: Sequence[Any],
            include_cross_page: bool = True,
            progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[Issue]:
        """Analyzes each snapshot, then compares the session as a whole."""
        snaps = [Snapshot.coerce(s) for s in snapshots]
        total = len(snaps)
        issues: List[Issue] = []

        for i, snap in enumerate(snaps):
            issues.extend(analyze_page(snap, self.thresholds))
            if progress_callback:
                progress_callback(i + 1, total)

        if include_cross_page:
            issues.extend(compare_snapshots(snaps, self.thresholds))

        logger.info("Analyzed %d snapshots: %d issues", total, len(issues))
        return issues

    def build_report(self, snapshots: Sequence[Any], issues: Sequence[Issue]) -> Report:
        """Constructs the report payload (summary, pages, grouped issues, recommendations)."""
        snaps = [Snapshot.coerce(s) for s in snapshots]
        grouped = {
            category: [
                IssueEntry(
                    severity=issue.severity.value,
                    message=issue.message,
                    detail=issue.detail or None,
                    url=issue.url,
                )
                for issue in members
            ]
            for category, members in group_by_category(issues).items()
        }
        return Report(
            summary=summarize(issues, total_pages=len(snaps)),
            pages=[_page_entry(s) for s in snaps],
            issues=grouped,
            recommendations=build_recommendations(issues),
        )
