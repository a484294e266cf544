from typing import Tuple

from pydantic import BaseModel, ConfigDict

TRACKING_PARAMS: Tuple[str, ...] = (
    "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
    "gclid", "fbclid", "msclkid", "mc_cid", "mc_eid", "ref", "source",
)


class Thresholds(BaseModel):
    """
    Heuristic limits used by the consistency rules.

    Every rule compares against a field of this model instead of an inline
    literal. A check fires when the observed value is strictly greater than
    the limit, except for the minimums (tap target size, hero area, sample
    counts) where the description says otherwise.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    # --- Single page: style variety ---
    style_group_count: int = 2            # button / input / skeleton style groups
    font_size_count: int = 2              # distinct button font sizes
    border_radius_count: int = 2          # distinct button border radii
    link_color_count: int = 3             # distinct link colors
    heading_font_size_variants: int = 1   # font sizes allowed per heading level

    # --- Single page: images (px²) ---
    lazy_image_area: float = 120000       # lazy image above the fold larger than this
    hero_image_min_area: float = 50000    # hero hints are skipped below this area

    # --- Interaction ---
    tap_target_min_size: float = 44       # WCAG 2.5.8 derived minimum side

    # --- Third parties ---
    third_party_origin_count: int = 10
    third_party_drift: int = 5

    # --- Cross page ---
    cross_page_style_signatures: int = 3
    skeleton_cross_page_signatures: int = 3
    font_family_count: int = 3
    dom_growth_ratio: float = 1.3
    dom_growth_min_samples: int = 3
    hidden_element_ratio: float = 0.3
    hidden_element_min_count: int = 100
    tap_target_drift_ratio: float = 2

    tracking_params: Tuple[str, ...] = TRACKING_PARAMS


DEFAULT_THRESHOLDS = Thresholds()
