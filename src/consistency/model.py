import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ELEMENT_CATEGORIES = ("buttons", "inputs", "headings", "links", "images")


def _as_text(v: Any) -> str:
    return "" if v is None else str(v)


def _as_optional_text(v: Any) -> Optional[str]:
    return None if v is None else str(v)


def _as_number(v: Any) -> Optional[float]:
    """Finite float or None; NaN and infinities count as missing."""
    if v is None or isinstance(v, bool):
        return None
    try:
        number = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_object_list(v: Any) -> Optional[List[Dict[str, Any]]]:
    """Keeps only mapping items; anything that is not a list counts as absent."""
    if not isinstance(v, list):
        return None
    return [item for item in v if isinstance(item, Mapping)]


class SnapshotModel(BaseModel):
    """
    Base for all extracted input records.
    Accepts the camelCase keys produced by the extraction script and is read-only.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class Dimensions(SnapshotModel):
    width: float = 0
    height: float = 0

    @field_validator("width", "height", mode="before")
    @classmethod
    def parse_size(cls, v: Any) -> float:
        return _as_number(v) or 0


def _as_dimensions(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, Mapping) else {}


class Element(SnapshotModel):
    """
    A single extracted UI element with its computed styles.
    Category-specific fields stay None when the extractor did not supply them.
    """
    tag: str = ""
    text: str = ""
    id: str = ""
    classes: str = ""
    styles: Dict[str, Optional[str]] = Field(default_factory=dict)
    dimensions: Dimensions = Field(default_factory=Dimensions)

    # inputs
    type: Optional[str] = None
    placeholder: Optional[str] = None
    # links
    href: Optional[str] = None
    # images
    src: Optional[str] = None
    alt: Optional[str] = None
    loading: Optional[str] = None
    fetch_priority: Optional[str] = None
    decoding: Optional[str] = None
    rect_top: Optional[float] = None
    rect_bottom: Optional[float] = None
    # buttons
    role: Optional[str] = None
    aria_label: Optional[str] = None
    title: Optional[str] = None
    tab_index: Optional[int] = None

    @field_validator("tag", "text", "id", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("classes", mode="before")
    @classmethod
    def parse_classes(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return " ".join(str(c) for c in v)
        return _as_text(v)

    @field_validator("styles", mode="before")
    @classmethod
    def parse_styles(cls, v: Any) -> Dict[str, Optional[str]]:
        if not isinstance(v, Mapping):
            return {}
        return {str(k): _as_optional_text(val) for k, val in v.items()}

    @field_validator("dimensions", mode="before")
    @classmethod
    def parse_dimensions(cls, v: Any) -> Dict[str, Any]:
        return _as_dimensions(v)

    @field_validator(
        "type", "placeholder", "href", "src", "alt", "loading", "fetch_priority",
        "decoding", "role", "aria_label", "title", mode="before"
    )
    @classmethod
    def parse_optional_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)

    @field_validator("rect_top", "rect_bottom", mode="before")
    @classmethod
    def parse_rect(cls, v: Any) -> Optional[float]:
        return _as_number(v)

    @field_validator("tab_index", mode="before")
    @classmethod
    def parse_tab_index(cls, v: Any) -> Optional[int]:
        number = _as_number(v)
        return None if number is None else int(number)

    @property
    def has_tab_index(self) -> bool:
        """False only when the extractor omitted tabIndex altogether; an explicit null counts as present."""
        return "tab_index" in self.model_fields_set

    @property
    def first_class(self) -> str:
        return self.classes.split(" ")[0]

    @property
    def area(self) -> float:
        return self.dimensions.width * self.dimensions.height

    @property
    def min_side(self) -> float:
        return min(self.dimensions.width, self.dimensions.height)


class HeroCandidate(SnapshotModel):
    """Large above-the-fold region painted with a CSS background-image."""
    tag: str = ""
    id: str = ""
    classes: str = ""
    dimensions: Dimensions = Field(default_factory=Dimensions)

    @field_validator("tag", "id", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("classes", mode="before")
    @classmethod
    def parse_classes(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return " ".join(str(c) for c in v)
        return _as_text(v)

    @field_validator("dimensions", mode="before")
    @classmethod
    def parse_dimensions(cls, v: Any) -> Dict[str, Any]:
        return _as_dimensions(v)

    @property
    def first_class(self) -> str:
        return self.classes.split(" ")[0]


class Overlay(SnapshotModel):
    """A fixed or absolute element covering the full viewport."""
    tag: str = ""
    id: str = ""
    position: str = ""
    z_index: str = ""
    opacity: Optional[str] = None
    pointer_events: Optional[str] = None
    dimensions: Dimensions = Field(default_factory=Dimensions)

    @field_validator("tag", "id", "position", "z_index", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("opacity", "pointer_events", mode="before")
    @classmethod
    def parse_optional_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)

    @field_validator("dimensions", mode="before")
    @classmethod
    def parse_dimensions(cls, v: Any) -> Dict[str, Any]:
        return _as_dimensions(v)


class Skeleton(SnapshotModel):
    """A loading placeholder (skeleton/shimmer) element."""
    tag: str = ""
    classes: str = ""
    styles: Dict[str, Optional[str]] = Field(default_factory=dict)
    dimensions: Dimensions = Field(default_factory=Dimensions)

    @field_validator("tag", "classes", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("styles", mode="before")
    @classmethod
    def parse_styles(cls, v: Any) -> Dict[str, Optional[str]]:
        if not isinstance(v, Mapping):
            return {}
        return {str(k): _as_optional_text(val) for k, val in v.items()}

    @field_validator("dimensions", mode="before")
    @classmethod
    def parse_dimensions(cls, v: Any) -> Dict[str, Any]:
        return _as_dimensions(v)


class ThirdPartyResource(SnapshotModel):
    host: str = ""
    count: int = 0

    @field_validator("host", mode="before")
    @classmethod
    def parse_host(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("count", mode="before")
    @classmethod
    def parse_count(cls, v: Any) -> int:
        return int(_as_number(v) or 0)


class DomStats(SnapshotModel):
    total_element_count: float = 0
    hidden_element_count: float = 0

    @field_validator("total_element_count", "hidden_element_count", mode="before")
    @classmethod
    def parse_count(cls, v: Any) -> float:
        return _as_number(v) or 0


class BodyVisibility(SnapshotModel):
    body_opacity: Optional[str] = None
    body_visibility: Optional[str] = None
    html_opacity: Optional[str] = None
    html_visibility: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def parse_optional_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)


class Snapshot(SnapshotModel):
    """
    One point-in-time observation of a page.

    Produced by the extraction collaborator and treated as read-only input.
    Every enrichment field is optional; malformed values validate to None
    so that a single bad field only disables the rules that read it.
    """
    url: str = ""
    full_url: Optional[str] = None
    title: str = ""
    timestamp: Optional[float] = None
    framework: Optional[str] = None
    is_spa: bool = Field(default=False, alias="isSPA")
    viewport_height: Optional[float] = None

    elements: Dict[str, List[Element]] = Field(default_factory=dict)

    # --- Optional enrichment ---
    hero_candidates: Optional[List[HeroCandidate]] = None
    overlays: Optional[List[Overlay]] = None
    skeletons: Optional[List[Skeleton]] = None
    third_party_resources: Optional[List[ThirdPartyResource]] = None
    dom_stats: Optional[DomStats] = None
    body_visibility: Optional[BodyVisibility] = None
    content_signature: Optional[str] = None
    primary_h1_text: Optional[str] = Field(default=None, alias="primaryH1Text")

    @field_validator("url", "title", mode="before")
    @classmethod
    def parse_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("full_url", "framework", "content_signature", "primary_h1_text", mode="before")
    @classmethod
    def parse_optional_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)

    @field_validator("timestamp", "viewport_height", mode="before")
    @classmethod
    def parse_number(cls, v: Any) -> Optional[float]:
        return _as_number(v)

    @field_validator("is_spa", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("elements", mode="before")
    @classmethod
    def parse_elements(cls, v: Any) -> Dict[str, List[Dict[str, Any]]]:
        """Guarantees the five standard categories and drops non-object entries."""
        source = v if isinstance(v, Mapping) else {}
        parsed = {name: [] for name in ELEMENT_CATEGORIES}
        for name, items in source.items():
            parsed[str(name)] = _as_object_list(items) or []
        return parsed

    @field_validator("hero_candidates", "overlays", "skeletons", "third_party_resources", mode="before")
    @classmethod
    def parse_object_list(cls, v: Any) -> Optional[List[Dict[str, Any]]]:
        return _as_object_list(v)

    @field_validator("dom_stats", "body_visibility", mode="before")
    @classmethod
    def parse_object(cls, v: Any) -> Optional[Mapping]:
        return v if isinstance(v, Mapping) else None

    @classmethod
    def coerce(cls, obj: Any) -> "Snapshot":
        """Accepts an already validated Snapshot or a raw mapping from the extractor."""
        if isinstance(obj, Snapshot):
            return obj
        if isinstance(obj, Mapping):
            return cls.model_validate(dict(obj))
        raise TypeError(f"Cannot build a Snapshot from {type(obj).__name__}")

    def category(self, name: str) -> List[Element]:
        return self.elements.get(name, [])

    @property
    def buttons(self) -> List[Element]: return self.category("buttons")

    @property
    def inputs(self) -> List[Element]: return self.category("inputs")

    @property
    def headings(self) -> List[Element]: return self.category("headings")

    @property
    def links(self) -> List[Element]: return self.category("links")

    @property
    def images(self) -> List[Element]: return self.category("images")


class Severity(str, Enum):
    """Closed set of issue severities, ordered by urgency: error > warning > info."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def urgency(self) -> int:
        return _URGENCY[self]


_URGENCY = {Severity.ERROR: 3, Severity.WARNING: 2, Severity.INFO: 1}


class Issue(BaseModel):
    """
    A single finding produced by the consistency engine.
    Page-level issues carry the page url; cross-page issues leave it empty.
    """
    severity: Severity
    category: str
    message: str
    detail: str = ""
    url: Optional[str] = None

    @property
    def is_cross_page(self) -> bool:
        return self.url is None
