from typing import List

from ...model import Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, format_px, format_size, truncate

TEXT_PREVIEW_LENGTH = 20


@audit_spec(categories=["UX: Tap Targets"])
def check_tap_targets(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """
    Rule: Buttons and links need a comfortable touch area.
    Elements with a zero dimension are not rendered and are skipped.
    """
    res = []
    min_size = thresholds.tap_target_min_size

    for el in [*snapshot.buttons, *snapshot.links]:
        smaller = el.min_side
        if not 0 < smaller < min_size:
            continue
        text = f' "{truncate(el.text, TEXT_PREVIEW_LENGTH)}"' if el.text else ""
        size = format_size(el.dimensions.width, el.dimensions.height)
        res.append(Issue(
            severity=Severity.WARNING,
            category="UX: Tap Targets",
            message=f"Small tap target: <{el.tag}>{text} is {size}px",
            detail=(
                f"Interactive elements should be at least {format_px(min_size)}×{format_px(min_size)}px "
                "for comfortable touch interaction."
            ),
            url=snapshot.url,
        ))
    return res
