# tests/core/conftest.py
import pytest

from consistency.model import Snapshot

BASE_BUTTON_STYLES = {
    "fontSize": "16px",
    "fontFamily": "Inter",
    "borderRadius": "4px",
    "padding": "8px 16px",
    "color": "rgb(255, 255, 255)",
}


def _element(tag="button", text="Click", styles=None, width=120, height=48, **extra):
    data = {
        "tag": tag,
        "text": text,
        "id": extra.pop("id", ""),
        "classes": extra.pop("classes", ""),
        "styles": dict(BASE_BUTTON_STYLES if styles is None else styles),
        "dimensions": {"width": width, "height": height},
    }
    data.update(extra)
    return data


def _snapshot(url="https://shop.test/", title="Shop", **fields):
    elements = {"buttons": [], "inputs": [], "headings": [], "links": [], "images": []}
    elements.update(fields.pop("elements", {}))
    data = {
        "url": url,
        "fullUrl": fields.pop("fullUrl", url),
        "title": title,
        "timestamp": fields.pop("timestamp", 1700000000000),
        "framework": fields.pop("framework", None),
        "isSPA": fields.pop("isSPA", False),
        "viewportHeight": fields.pop("viewportHeight", 800),
        "elements": elements,
    }
    data.update(fields)
    return Snapshot.model_validate(data)


@pytest.fixture
def make_element():
    """Factory for raw element dicts shaped like the extractor output."""
    return _element


@pytest.fixture
def make_snapshot():
    """Factory for validated Snapshots; keyword arguments use the extractor's camelCase keys."""
    return _snapshot


@pytest.fixture
def empty_snapshot():
    return _snapshot()
