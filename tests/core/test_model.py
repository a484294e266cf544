# tests/core/test_model.py
import pytest

from consistency.model import Element, Issue, Severity, Snapshot


def test_snapshot_reads_camel_case_keys():
    """The extractor's camelCase payload maps onto snake_case fields."""
    snap = Snapshot.model_validate({
        "url": "https://app.test/#/cart",
        "fullUrl": "https://app.test/?utm_source=x#/cart",
        "isSPA": True,
        "viewportHeight": 900,
        "primaryH1Text": "Cart",
        "domStats": {"totalElementCount": 1200, "hiddenElementCount": 40},
        "elements": {"images": [{"tag": "img", "fetchPriority": "high", "rectTop": 0, "rectBottom": 300}]},
    })

    assert snap.is_spa is True
    assert snap.full_url == "https://app.test/?utm_source=x#/cart"
    assert snap.viewport_height == 900
    assert snap.primary_h1_text == "Cart"
    assert snap.dom_stats.total_element_count == 1200
    assert snap.images[0].fetch_priority == "high"
    assert snap.images[0].rect_bottom == 300


def test_snapshot_always_has_standard_categories():
    snap = Snapshot.model_validate({"url": "https://a.test/", "elements": {"selects": [{"tag": "select"}]}})
    assert snap.buttons == []
    assert snap.headings == []
    assert len(snap.category("selects")) == 1
    assert snap.category("unknown") == []


def test_malformed_optional_fields_become_absent():
    """Wrong-typed enrichment fields are treated as not collected, never as errors."""
    snap = Snapshot.model_validate({
        "url": "https://a.test/",
        "elements": "not-a-mapping",
        "overlays": "oops",
        "skeletons": [1, "two", {"styles": {"backgroundColor": "#eee"}}],
        "thirdPartyResources": {"host": "cdn.test"},
        "domStats": [1, 2, 3],
        "bodyVisibility": "hidden",
        "viewportHeight": "tall",
    })

    assert snap.overlays is None
    assert len(snap.skeletons) == 1
    assert snap.third_party_resources is None
    assert snap.dom_stats is None
    assert snap.body_visibility is None
    assert snap.viewport_height is None
    assert snap.buttons == []


@pytest.mark.parametrize("bad_number", [float("nan"), float("inf"), float("-inf"), "1e999"])
def test_non_finite_numbers_become_absent(bad_number):
    """json.load accepts NaN and Infinity; they must not abort validation."""
    snap = Snapshot.model_validate({
        "url": "https://a.test/",
        "viewportHeight": bad_number,
        "thirdPartyResources": [{"host": "cdn.test", "count": bad_number}],
        "domStats": {"totalElementCount": bad_number, "hiddenElementCount": 3},
        "elements": {"images": [{"tag": "img", "rectTop": bad_number, "dimensions": {"width": bad_number}}]},
    })

    assert snap.viewport_height is None
    assert snap.third_party_resources[0].count == 0
    assert snap.dom_stats.total_element_count == 0
    assert snap.images[0].rect_top is None
    assert snap.images[0].dimensions.width == 0


def test_tab_index_presence():
    """An explicit null tabIndex is present; only an omitted key counts as missing."""
    omitted = Element.model_validate({"tag": "span"})
    explicit_null = Element.model_validate({"tag": "span", "tabIndex": None})

    assert omitted.tab_index is None and not omitted.has_tab_index
    assert explicit_null.tab_index is None and explicit_null.has_tab_index


def test_element_coerces_loose_values():
    el = Element.model_validate({
        "tag": "div",
        "text": None,
        "classes": ["btn", "btn-primary"],
        "styles": {"fontSize": 16, "padding": None},
        "dimensions": {"width": "40", "height": None},
        "tabIndex": "0",
    })

    assert el.text == ""
    assert el.classes == "btn btn-primary"
    assert el.first_class == "btn"
    assert el.styles == {"fontSize": "16", "padding": None}
    assert el.dimensions.width == 40
    assert el.dimensions.height == 0
    assert el.tab_index == 0


def test_element_non_category_items_are_dropped():
    snap = Snapshot.model_validate({"elements": {"buttons": [None, 3, {"tag": "button"}], "links": "x"}})
    assert len(snap.buttons) == 1
    assert snap.links == []


def test_snapshot_is_read_only(empty_snapshot):
    with pytest.raises(Exception):
        empty_snapshot.url = "https://changed.test/"


def test_coerce_accepts_models_and_mappings(empty_snapshot):
    assert Snapshot.coerce(empty_snapshot) is empty_snapshot
    assert Snapshot.coerce({"url": "https://b.test/"}).url == "https://b.test/"
    with pytest.raises(TypeError):
        Snapshot.coerce(["not", "a", "snapshot"])


def test_severity_urgency_order():
    assert Severity.ERROR.urgency > Severity.WARNING.urgency > Severity.INFO.urgency
    assert {s.value for s in Severity} == {"error", "warning", "info"}


def test_issue_scope():
    page_issue = Issue(severity=Severity.INFO, category="Links", message="m", url="https://a.test/")
    cross_issue = Issue(severity="warning", category="Cross-Page: Buttons", message="m")

    assert not page_issue.is_cross_page
    assert cross_issue.is_cross_page
    assert cross_issue.severity is Severity.WARNING
