from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Base for exported report data; serializes with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportSummary(ReportModel):
    total_pages: int = 0
    total_issues: int = 0
    errors: int = 0
    warnings: int = 0
    info: int = 0


class PageEntry(ReportModel):
    """One scanned page as listed in the report."""
    url: str
    title: str = ""
    scanned_at: Optional[datetime] = None
    framework: Optional[str] = None
    is_spa: bool = Field(default=False, alias="isSPA")
    element_counts: Dict[str, int] = Field(default_factory=dict)


class IssueEntry(ReportModel):
    severity: str
    message: str
    detail: Optional[str] = None
    url: Optional[str] = None


class Recommendation(ReportModel):
    title: str
    details: str
    link: str


class Report(ReportModel):
    """
    Data model representing an exported audit session.
    Issues are grouped by category in the order the categories first appeared.
    """
    exported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    summary: ReportSummary = Field(default_factory=ReportSummary)
    pages: List[PageEntry] = Field(default_factory=list)
    issues: Dict[str, List[IssueEntry]] = Field(default_factory=dict)
    recommendations: List[Recommendation] = Field(default_factory=list)
