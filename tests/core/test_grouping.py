# tests/core/test_grouping.py
from consistency.model import Element, Skeleton
from consistency.rules.grouping import (
    BUTTON_STYLE_KEYS,
    SKELETON_STYLE_KEYS,
    distinct,
    group_by_styles,
    style_signature,
)


def _el(**styles):
    return Element.model_validate({"tag": "button", "styles": styles})


def test_groups_follow_first_occurrence_order():
    a = _el(fontSize="14px", fontFamily="Inter", borderRadius="4px", padding="8px")
    b = _el(fontSize="16px", fontFamily="Inter", borderRadius="4px", padding="8px")
    c = _el(fontSize="14px", fontFamily="Inter", borderRadius="4px", padding="8px")

    groups = group_by_styles([a, b, c], BUTTON_STYLE_KEYS)

    assert list(groups) == ["14px|Inter|4px|8px", "16px|Inter|4px|8px"]
    assert groups["14px|Inter|4px|8px"] == [a, c]


def test_missing_values_use_empty_token():
    """Missing and None style values collapse into the same stable key."""
    missing = _el(fontSize="14px")
    explicit_none = Element.model_validate({"styles": {"fontSize": "14px", "padding": None}})

    assert style_signature(missing, BUTTON_STYLE_KEYS) == "14px|||"
    assert len(group_by_styles([missing, explicit_none], BUTTON_STYLE_KEYS)) == 1


def test_grouping_only_looks_at_requested_keys():
    a = _el(backgroundColor="#eee", borderRadius="4px", color="red")
    b = _el(backgroundColor="#eee", borderRadius="4px", color="blue")
    assert len(group_by_styles([a, b], SKELETON_STYLE_KEYS)) == 1


def test_grouping_works_for_skeletons():
    skeletons = [
        Skeleton.model_validate({"styles": {"backgroundColor": "#eee", "borderRadius": "4px"}}),
        Skeleton.model_validate({"styles": {"backgroundColor": "#ddd", "borderRadius": "4px"}}),
    ]
    assert list(group_by_styles(skeletons, SKELETON_STYLE_KEYS)) == ["#eee|4px", "#ddd|4px"]


def test_empty_input_yields_no_groups():
    assert group_by_styles([], BUTTON_STYLE_KEYS) == {}


def test_distinct_keeps_first_seen_order():
    assert distinct(["16px", "14px", "16px", None, "14px"]) == ["16px", "14px", None]
