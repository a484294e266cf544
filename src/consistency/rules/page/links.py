from typing import List

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec
from ..grouping import distinct


@audit_spec(categories=["Links"])
def check_link_consistency(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """Rule: Links should be recognizable by a small, consistent set of colors."""
    links = snapshot.links
    res = []
    if len(links) < 2:
        return res

    colors = distinct(link.styles.get("color") for link in links)
    if len(colors) > thresholds.link_color_count:
        res.append(Issue(
            severity=Severity.INFO,
            category="Links",
            message=f"Links use {len(colors)} different colors",
            detail="Too many link colors can make it hard for users to identify clickable elements.",
            url=snapshot.url,
        ))
    return res
