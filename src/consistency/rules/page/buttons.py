from typing import List

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, describe_element, join_values
from ..grouping import BUTTON_STYLE_KEYS, distinct, group_by_styles


@audit_spec(categories=["Buttons"])
def check_button_consistency(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """
    Rule: Buttons on one page should share a small number of visual treatments.
    Also flags native <button> elements without any text.
    """
    buttons = snapshot.buttons
    res = []

    groups = group_by_styles(buttons, BUTTON_STYLE_KEYS)
    if len(buttons) >= 2 and len(groups) > thresholds.style_group_count:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Buttons",
            message=f"{len(groups)} different button styles found on this page",
            detail=(
                f"Buttons use {len(groups)} distinct style combinations for font-size, font-family, "
                "border-radius, and padding. Consider unifying them."
            ),
            url=snapshot.url,
        ))

    font_sizes = distinct(b.styles.get("fontSize") for b in buttons)
    if len(font_sizes) > thresholds.font_size_count:
        res.append(Issue(
            severity=Severity.WARNING,
            category="Buttons",
            message=f"Buttons use {len(font_sizes)} different font sizes: {join_values(font_sizes)}",
            detail="Consistent button font sizing improves visual hierarchy.",
            url=snapshot.url,
        ))

    radii = distinct(b.styles.get("borderRadius") for b in buttons)
    if len(radii) > thresholds.border_radius_count:
        res.append(Issue(
            severity=Severity.INFO,
            category="Buttons",
            message=f"Buttons use {len(radii)} different border-radius values: {join_values(radii)}",
            detail="Mixing rounded and sharp buttons can look inconsistent.",
            url=snapshot.url,
        ))

    for btn in buttons:
        if not btn.text and btn.tag == "button":
            res.append(Issue(
                severity=Severity.ERROR,
                category="Buttons",
                message="Button has no text content",
                detail=f"A <{btn.tag}> element has no visible text, which hurts accessibility.",
                url=snapshot.url,
            ))

    return res


@audit_spec(categories=["Buttons: Accessibility"])
def check_role_button_accessibility(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """
    Rule: Custom buttons (role="button" or non-<button> tags) need an accessible
    name, and role="button" elements must be reachable with the keyboard.
    """
    res = []
    for btn in snapshot.buttons:
        if btn.role != "button" and btn.tag == "button":
            continue

        if not (btn.aria_label or btn.title or btn.text):
            label = describe_element(btn.tag, btn.id, btn.first_class)
            res.append(Issue(
                severity=Severity.ERROR,
                category="Buttons: Accessibility",
                message=f"Interactive element without accessible name: {label}",
                detail="Buttons without visible text need an aria-label or title attribute for screen reader users.",
                url=snapshot.url,
            ))

        # A missing tabIndex fails; an explicit null or unparseable value does not compare as negative.
        unfocusable = not btn.has_tab_index or (btn.tab_index is not None and btn.tab_index < 0)
        if btn.role == "button" and unfocusable:
            label = describe_element(btn.tag, btn.id)
            res.append(Issue(
                severity=Severity.WARNING,
                category="Buttons: Accessibility",
                message=f'role="button" element not keyboard focusable: {label}',
                detail='Elements with role="button" should have tabindex="0" to be keyboard accessible.',
                url=snapshot.url,
            ))

    return res
