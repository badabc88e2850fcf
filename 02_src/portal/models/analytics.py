"""Dashboard and chart data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class DashboardStats:
    """Headline counters for the dashboard."""

    total_cases: int | None = None
    active_warrants: int | None = None
    search_count: int | None = None
    district_count: int | None = None


@dataclass
class StatCard:
    """A single dashboard tile."""

    label: str
    value: int | None
    icon: str
    color: str


@dataclass
class RecentActivity:
    """An entry of the dashboard's recent activity feed."""

    id: str
    description: str
    timestamp: datetime | None


@dataclass
class ChartDataset:
    """One series of a chart."""

    label: str
    data: list[Any]
    border_color: str | None = None
    background_color: str | None = None
    tension: float | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"label": self.label, "data": self.data}
        if self.border_color is not None:
            out["borderColor"] = self.border_color
        if self.background_color is not None:
            out["backgroundColor"] = self.background_color
        if self.tension is not None:
            out["tension"] = self.tension
        return out


@dataclass
class ChartData:
    """Labels plus datasets, in the shape chart renderers expect."""

    title: str
    labels: list[str] = field(default_factory=list)
    datasets: list[ChartDataset] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "labels": self.labels,
            "datasets": [d.to_dict() for d in self.datasets],
        }
