from typing import Dict, List, Sequence

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ...utils.url_utils import UrlUtils
from ..core import audit_spec, truncate
from ..grouping import distinct


@audit_spec(categories=["Cross-Page: SPA Navigation"])
def check_stale_route_metadata(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    """
    Rule: Single-page apps must update the document title and primary heading
    on route changes. Only applies when at least one snapshot is a SPA.
    """
    res = []
    if not any(s.is_spa for s in snapshots):
        return res

    unique_urls = distinct(s.url for s in snapshots)
    if len(unique_urls) < 2:
        return res

    unique_titles = distinct(s.title for s in snapshots)
    if len(unique_titles) == 1:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Cross-Page: SPA Navigation",
            message=f'All {len(snapshots)} pages share the same title: "{truncate(unique_titles[0], 60)}"',
            detail=(
                "SPA routes should update document.title on navigation for better UX, "
                "tab management, and accessibility."
            ),
        ))

    unique_h1s = distinct(s.primary_h1_text for s in snapshots if s.primary_h1_text)
    if len(unique_h1s) == 1 and len(unique_urls) > 2:
        res.append(Issue(
            severity=Severity.INFO,
            category="Cross-Page: SPA Navigation",
            message=f'All pages share the same h1: "{truncate(unique_h1s[0], 60)}"',
            detail="The primary heading should reflect the current route content.",
        ))

    return res


@audit_spec(categories=["Cross-Page: URL Hygiene"])
def check_url_param_duplication(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    """Rule: Pages that only differ by tracking parameters are the same page."""
    res = []
    normalized: Dict[str, List[str]] = {}
    for snap in snapshots:
        address = snap.full_url or snap.url
        clean = UrlUtils.strip_tracking_params(address, thresholds.tracking_params)
        normalized.setdefault(clean, []).append(address)

    for clean, addresses in normalized.items():
        if len(addresses) > 1:
            res.append(Issue(
                severity=Severity.WARNING,
                category="Cross-Page: URL Hygiene",
                message=f"{len(addresses)} snapshots map to the same URL after stripping tracking params",
                detail=(
                    f"Normalized URL: {truncate(clean, 100)}. Consider stripping tracking parameters "
                    "client-side, using canonical URLs, or implementing No-Vary-Search on the server."
                ),
            ))
    return res


@audit_spec(categories=["Cross-Page: Content Duplication"])
def check_same_content_different_url(snapshots: Sequence[Snapshot], thresholds: Thresholds) -> List[Issue]:
    """
    Rule: One content fingerprint should live at one URL.
    The signature is an opaque equality key computed by the extractor.
    """
    res = []
    by_signature: Dict[str, List[str]] = {}
    for snap in snapshots:
        if not snap.content_signature:
            continue
        by_signature.setdefault(snap.content_signature, []).append(snap.url)

    for urls in by_signature.values():
        unique_urls = distinct(urls)
        if len(unique_urls) > 1:
            listed = ", ".join(truncate(u, 80) for u in unique_urls)
            res.append(Issue(
                severity=Severity.WARNING,
                category="Cross-Page: Content Duplication",
                message=f"{len(unique_urls)} different URLs serve effectively identical content",
                detail=f"URLs: {listed}. This may indicate URL parameter noise or routing misconfiguration.",
            ))
    return res
