import re
from typing import List, Optional

from ...model import Element, Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, join_values
from ..grouping import distinct

HEADING_TAG = re.compile(r"^h([1-6])$", re.IGNORECASE)


def heading_level(tag: str) -> Optional[int]:
    """Extracts the hierarchy level from a heading tag (e.g., 'h2' -> 2)."""
    match = HEADING_TAG.match(tag or "")
    return int(match.group(1)) if match else None


# --- AUDIT RULES ---

@audit_spec(categories=["Headings"])
def check_heading_hierarchy(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """
    Rule: Headings form an outline without skipped levels, with a single h1
    and one font size per level.
    """
    res = []
    leveled = [(h, heading_level(h.tag)) for h in snapshot.headings]
    # Tags that are not h1-h6 are dropped, so their neighbours are compared directly.
    leveled = [(h, level) for h, level in leveled if level is not None]

    # 1. Skipped levels (h1 followed directly by h3)
    for (prev, prev_level), (cur, cur_level) in zip(leveled, leveled[1:]):
        if cur_level > prev_level + 1:
            res.append(Issue(
                severity=Severity.WARNING,
                category="Headings",
                message=f"Heading hierarchy skips from h{prev_level} to h{cur_level}",
                detail=(
                    f'"{prev.text}" (h{prev_level}) is followed by "{cur.text}" (h{cur_level}). '
                    "Skipping heading levels hurts accessibility and SEO."
                ),
                url=snapshot.url,
            ))

    # 2. Presence and uniqueness of h1
    h1_count = sum(1 for _, level in leveled if level == 1)
    if h1_count == 0:
        res.append(Issue(
            severity=Severity.INFO,
            category="Headings",
            message="Page has no h1 heading",
            detail="Every page should have exactly one h1 for accessibility and SEO.",
            url=snapshot.url,
        ))
    elif h1_count > 1:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Headings",
            message=f"Page has {h1_count} h1 headings",
            detail="Best practice is to have exactly one h1 per page.",
            url=snapshot.url,
        ))

    # 3. Font size consistency per level
    for level in range(1, 7):
        same_level: List[Element] = [h for h, lvl in leveled if lvl == level]
        if len(same_level) < 2:
            continue
        font_sizes = distinct(h.styles.get("fontSize") for h in same_level)
        if len(font_sizes) > thresholds.heading_font_size_variants:
            res.append(Issue(
                severity=Severity.WARNING,
                category="Headings",
                message=f"h{level} headings have inconsistent font sizes: {join_values(font_sizes)}",
                detail="Same-level headings should be visually consistent.",
                url=snapshot.url,
            ))

    return res
