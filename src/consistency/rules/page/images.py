from typing import List

from ...model import Element, Issue, Severity, Snapshot
from ...thresholds import Thresholds
from ..core import audit_spec, truncate

SRC_PREVIEW_LENGTH = 60


def _src_suffix(img: Element) -> str:
    return f": {truncate(img.src, SRC_PREVIEW_LENGTH)}" if img.src else ""


def is_above_fold(img: Element, viewport_height: float) -> bool:
    """True when the image's vertical extent overlaps [0, viewport_height)."""
    if img.rect_top is None or img.rect_bottom is None:
        return False
    return img.rect_top < viewport_height and img.rect_bottom > 0


# --- RULES ---

@audit_spec(categories=["Images"])
def check_image_accessibility(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    res = []
    for img in snapshot.images:
        if not img.alt:
            res.append(Issue(
                severity=Severity.ERROR,
                category="Images",
                message=f"Image missing alt text{_src_suffix(img)}",
                detail="All images should have alt text for accessibility.",
                url=snapshot.url,
            ))
    return res


@audit_spec(categories=["Images: Performance"])
def check_above_fold_lazy_images(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """Rule: Large images visible on first paint must not be lazy-loaded."""
    res = []
    vh = snapshot.viewport_height
    if not vh:
        return res

    for img in snapshot.images:
        if img.loading != "lazy" or not is_above_fold(img, vh):
            continue
        if img.area > thresholds.lazy_image_area:
            res.append(Issue(
                severity=Severity.WARNING,
                category="Images: Performance",
                message=f'Above-the-fold image uses loading="lazy"{_src_suffix(img)}',
                detail=(
                    "Lazy-loading above-the-fold images delays their render and hurts perceived performance. "
                    'Remove loading="lazy" for hero/banner images.'
                ),
                url=snapshot.url,
            ))
    return res


@audit_spec(categories=["Images: Performance"])
def check_hero_image_hints(snapshot: Snapshot, thresholds: Thresholds) -> List[Issue]:
    """
    Rule: The largest above-the-fold image is the likely LCP element and should
    be fetched with high priority and decoded asynchronously.
    """
    res = []
    vh = snapshot.viewport_height
    if not vh:
        return res

    above_fold = [img for img in snapshot.images if is_above_fold(img, vh)]
    if not above_fold:
        return res

    # Strict comparison keeps the first image on ties
    hero = above_fold[0]
    for img in above_fold[1:]:
        if img.area > hero.area:
            hero = img

    if hero.area < thresholds.hero_image_min_area:
        return res

    if not hero.fetch_priority or hero.fetch_priority == "auto":
        res.append(Issue(
            severity=Severity.INFO,
            category="Images: Performance",
            message=f'Largest above-fold image missing fetchpriority="high"{_src_suffix(hero)}',
            detail=(
                'Adding fetchpriority="high" to the hero image helps the browser prioritize its download, '
                "improving LCP."
            ),
            url=snapshot.url,
        ))

    if hero.decoding == "sync":
        res.append(Issue(
            severity=Severity.WARNING,
            category="Images: Performance",
            message=f'Hero image uses decoding="sync"{_src_suffix(hero)}',
            detail='Synchronous decoding blocks the main thread. Use decoding="async" or remove the attribute.',
            url=snapshot.url,
        ))

    return res
