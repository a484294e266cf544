# tests/core/test_engine.py
import json
import logging

import pytest

from consistency import engine
from consistency.engine import (
    CROSS_PAGE_RULES,
    PAGE_RULES,
    analyze_page,
    compare_snapshots,
    get_all_categories,
)
from consistency.model import Severity
from consistency.thresholds import DEFAULT_THRESHOLDS, Thresholds


@pytest.fixture
def busy_page(make_element, make_snapshot):
    """A page that trips several rules at once."""
    return make_snapshot(
        "https://shop.test/product",
        elements={
            "buttons": [
                make_element("button", "", styles={"fontSize": "14px"}),
                make_element("button", "Buy", styles={"fontSize": "16px"}),
                make_element("button", "Save", styles={"fontSize": "18px"}),
            ],
            "headings": [make_element("h2", "Specs", styles={"fontSize": "24px"})],
            "images": [make_element("img", "", src="https://cdn.test/a.png", width=100, height=100)],
        },
    )


def test_analyze_page_is_idempotent(busy_page):
    first = analyze_page(busy_page)
    second = analyze_page(busy_page)

    assert first == second
    assert first is not second


def test_analyze_page_accepts_raw_mappings(busy_page):
    raw = busy_page.model_dump(by_alias=True)
    assert analyze_page(raw) == analyze_page(busy_page)


def test_findings_follow_rule_declaration_order(busy_page):
    categories = [issue.category for issue in analyze_page(busy_page)]

    assert categories.index("Buttons") < categories.index("Headings") < categories.index("Images")
    assert all(issue.url == "https://shop.test/product" for issue in analyze_page(busy_page))


def test_empty_page_only_reports_missing_h1(empty_snapshot):
    issues = analyze_page(empty_snapshot)
    assert [(i.severity, i.category) for i in issues] == [(Severity.INFO, "Headings")]


def test_compare_needs_two_snapshots(busy_page):
    assert compare_snapshots([]) == []
    assert compare_snapshots([busy_page]) == []


def test_tracking_variants_yield_one_url_warning(make_snapshot):
    snaps = [
        make_snapshot("https://a.com/p", fullUrl="https://a.com/p?utm_source=x"),
        make_snapshot("https://a.com/p", fullUrl="https://a.com/p"),
    ]
    issues = compare_snapshots(snaps)

    hygiene = [i for i in issues if i.category == "Cross-Page: URL Hygiene"]
    assert len(hygiene) == 1
    assert hygiene[0].severity == Severity.WARNING
    assert all(i.url is None for i in issues)


def test_compare_is_order_stable(make_element, make_snapshot):
    pages = [
        make_snapshot(f"https://a.test/{i}", elements={"buttons": [
            make_element("button", "Go", styles={"fontSize": f"{10 + i}px"}),
        ]})
        for i in range(4)
    ]
    assert compare_snapshots(pages) == compare_snapshots(list(pages))
    assert [i.category for i in compare_snapshots(pages)] == ["Cross-Page: Buttons"]


def test_failing_rule_does_not_stop_the_others(monkeypatch, caplog, busy_page):
    def broken(snapshot, thresholds):
        raise RuntimeError("boom")

    healthy = analyze_page(busy_page)
    monkeypatch.setattr(engine, "PAGE_RULES", (broken, *PAGE_RULES))

    with caplog.at_level(logging.ERROR, logger="consistency.engine"):
        issues = analyze_page(busy_page)

    assert issues == healthy
    assert "Rule broken failed" in caplog.text


def test_thresholds_override(make_element, make_snapshot):
    links = [
        make_element("a", "x", styles={"color": c, "textDecoration": "none"})
        for c in ("red", "green", "blue", "black")
    ]
    page = make_snapshot(elements={"links": links})

    assert any(i.category == "Links" for i in analyze_page(page))
    relaxed = Thresholds(link_color_count=10)
    assert not any(i.category == "Links" for i in analyze_page(page, relaxed))


def test_thresholds_are_read_only():
    with pytest.raises(Exception):
        DEFAULT_THRESHOLDS.tap_target_min_size = 10


def test_unknown_threshold_is_rejected():
    with pytest.raises(Exception):
        Thresholds(not_a_threshold=3)


def test_every_rule_declares_categories():
    for rule in (*PAGE_RULES, *CROSS_PAGE_RULES):
        assert rule.defined_categories, rule.__name__

    categories = get_all_categories()
    assert categories == sorted(categories)
    assert "Buttons" in categories
    assert "Cross-Page: SPA Health" in categories
    assert len(PAGE_RULES) == 13
    assert len(CROSS_PAGE_RULES) == 11


def test_non_finite_enrichment_does_not_abort(make_snapshot):
    raw = json.loads('{"url": "https://a.test/", "thirdPartyResources": [{"host": "x.test", "count": NaN}],'
                     ' "domStats": {"totalElementCount": Infinity, "hiddenElementCount": 1}}')
    other = make_snapshot("https://a.test/2", thirdPartyResources=[{"host": f"t{i}.test"} for i in range(7)])

    assert [i.category for i in analyze_page(raw)] == ["Headings"]
    assert [i.category for i in compare_snapshots([raw, other])] == ["Cross-Page: Third Parties"]
