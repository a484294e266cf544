# tests/core/test_report_controller.py
from datetime import datetime, timezone

import pytest

from consistency.model import Issue, Severity
from consistency.thresholds import Thresholds
from prospector_cli.controllers.report_controller import (
    BASE_RECOMMENDATIONS,
    ReportController,
    build_recommendations,
    filter_issues,
    group_by_category,
    summarize,
)


def _issue(severity, category, url="https://a.test/"):
    return Issue(severity=severity, category=category, message=f"{category} issue", url=url)


@pytest.fixture
def issues():
    return [
        _issue(Severity.ERROR, "Images"),
        _issue(Severity.WARNING, "Buttons"),
        _issue(Severity.INFO, "Images"),
        _issue(Severity.WARNING, "Cross-Page: SPA Health", url=None),
    ]


def test_summarize_counts_by_severity(issues):
    summary = summarize(issues, total_pages=2)
    assert (summary.total_pages, summary.total_issues) == (2, 4)
    assert (summary.errors, summary.warnings, summary.info) == (1, 2, 1)


def test_group_by_category_keeps_first_appearance(issues):
    groups = group_by_category(issues)
    assert list(groups) == ["Images", "Buttons", "Cross-Page: SPA Health"]
    assert len(groups["Images"]) == 2


def test_recommendations_follow_categories(issues):
    titles = [rec.title for rec in build_recommendations(issues)]

    assert titles[:len(BASE_RECOMMENDATIONS)] == [rec.title for rec in BASE_RECOMMENDATIONS]
    assert "Image Alt Text Checks" in titles
    assert "Standardize Buttons and Inputs" in titles
    assert "Improve SPA Navigation Hygiene" in titles
    assert "Increase Tap Target Sizes" not in titles


def test_no_issues_only_base_recommendations():
    assert build_recommendations([]) == BASE_RECOMMENDATIONS


def test_filter_by_minimum_severity(issues):
    kept = filter_issues(issues, min_severity=Severity.WARNING)
    assert [i.severity for i in kept] == [Severity.ERROR, Severity.WARNING, Severity.WARNING]


def test_filter_by_category_warns_on_unknown(issues, caplog):
    kept = filter_issues(issues, categories=["Images", "Made Up"])

    assert [i.category for i in kept] == ["Images", "Images"]
    assert "Made Up" in caplog.text


def test_run_combines_page_and_cross_page_issues(make_snapshot):
    snaps = [
        make_snapshot("https://a.com/p", fullUrl="https://a.com/p?utm_source=x"),
        make_snapshot("https://a.com/p", fullUrl="https://a.com/p"),
    ]
    progress = []
    controller = ReportController()

    issues = controller.run(snaps, progress_callback=lambda done, total: progress.append((done, total)))

    assert progress == [(1, 2), (2, 2)]
    assert [i.category for i in issues] == ["Headings", "Headings", "Cross-Page: URL Hygiene"]
    assert [i.category for i in controller.run(snaps, include_cross_page=False)] == ["Headings", "Headings"]


def test_run_uses_controller_thresholds(make_element, make_snapshot):
    page = make_snapshot(elements={"links": [make_element("a", "Tiny", width=30, height=30)]})
    categories = lambda issues: {i.category for i in issues}

    assert "UX: Tap Targets" in categories(ReportController().run([page]))
    assert "UX: Tap Targets" not in categories(ReportController(Thresholds(tap_target_min_size=20)).run([page]))


def test_build_report(make_snapshot, make_element):
    snaps = [
        make_snapshot("https://a.test/", "Home", framework="React", isSPA=True,
                      elements={"buttons": [make_element()]}),
        make_snapshot("https://a.test/about", "About", timestamp=None),
    ]
    controller = ReportController()
    issues = controller.run(snaps)

    report = controller.build_report(snaps, issues)

    assert report.summary.total_pages == 2
    assert report.summary.total_issues == len(issues)
    assert report.pages[0].scanned_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert report.pages[0].element_counts["buttons"] == 1
    assert report.pages[0].is_spa is True
    assert report.pages[1].scanned_at is None
    assert list(report.issues) == ["Headings"]
    assert report.issues["Headings"][0].url == "https://a.test/"

    payload = report.model_dump(by_alias=True)
    assert {"exportedAt", "summary", "pages", "issues", "recommendations"} <= set(payload)
    assert payload["summary"]["totalIssues"] == len(issues)
