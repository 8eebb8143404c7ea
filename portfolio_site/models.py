"""Pydantic models for the portfolio site."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageType(str, Enum):
    HOME = "home"
    DETAIL = "detail"
    GENERATOR = "generator"


class ProjectNotFoundError(ValueError):
    """No project with the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Project not found: {slug!r}")
        self.slug = slug


# --- Record parts ---


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class ProjectLinks(_Record):
    live: str | None = None
    repo: str | None = None
    figma: str | None = None


class ImageRef(_Record):
    src: str
    alt: str = ""
    caption: str | None = None


class DesignSection(_Record):
    description: str | None = None
    images: list[ImageRef] = Field(default_factory=list)


class BuildSection(_Record):
    description: str | None = None
    features: list[str] = Field(default_factory=list)


class Outcome(_Record):
    label: str = ""
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, v: Any) -> Any:
        # Metrics are often written as bare numbers in the JSON
        if isinstance(v, (int, float)):
            return str(v)
        return v


# --- Project ---


class Project(_Record):
    """One portfolio project, as read from the project data resource."""
    slug: str
    title: str = ""
    subtitle: str | None = None
    tagline: str | None = None
    overview: str | None = None
    role: str | None = None
    status: str | None = None
    year: int | None = None
    tags: list[str] = Field(default_factory=list)
    stack: list[str] = Field(default_factory=list)
    problem: str | list[str] | None = None
    goals: list[str] = Field(default_factory=list)
    research: str | list[str] | None = None
    design: DesignSection | None = None
    build: BuildSection | None = None
    demo: str | None = None
    outcomes: list[Outcome | str] = Field(default_factory=list)
    gallery: list[ImageRef] = Field(default_factory=list)
    links: ProjectLinks = Field(default_factory=ProjectLinks)
    hero_image: str | None = Field(default=None, alias="heroImage")
    thumbnail: str | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, v: str) -> str:
        if not v or "/" in v or any(ch.isspace() for ch in v):
            raise ValueError(f"Slug must be a non-empty URL segment, got {v!r}")
        return v

    @field_validator("links", mode="before")
    @classmethod
    def _none_links(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def display_title(self) -> str:
        """Title for headings and tags; records without one show their slug."""
        return self.title.strip() or self.slug

    @property
    def metric_outcomes(self) -> list[Outcome]:
        """Outcomes that render as metric tiles (both label and value present)."""
        return [o for o in self.outcomes if isinstance(o, Outcome) and o.label and o.value]

    def searchable_text(self) -> str:
        parts = [self.title, self.subtitle or "", self.overview or "", *self.stack, *self.tags]
        return " ".join(parts).lower()


# --- Filter state ---


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    selected_category: str = ""
    search_term: str = ""

    @field_validator("search_term")
    @classmethod
    def _normalise_term(cls, v: str) -> str:
        return v.lower().strip()

    @property
    def is_empty(self) -> bool:
        return not self.selected_category and not self.search_term


# --- Collection ---


@dataclass(frozen=True)
class ProjectCollection:
    """Ordered, immutable sequence of projects."""
    projects: tuple[Project, ...] = ()

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "ProjectCollection":
        return cls(tuple(Project.model_validate(r) for r in records))

    def to_records(self) -> list[dict[str, Any]]:
        return [
            p.model_dump(by_alias=True, exclude_none=True, exclude_defaults=True)
            for p in self.projects
        ]

    def __iter__(self) -> Iterator[Project]:
        return iter(self.projects)

    def __len__(self) -> int:
        return len(self.projects)

    def __getitem__(self, index: int) -> Project:
        return self.projects[index]

    @property
    def slugs(self) -> list[str]:
        return [p.slug for p in self.projects]

    def index_of(self, slug: str) -> int:
        """Index of the first project with this slug, -1 if absent."""
        for i, p in enumerate(self.projects):
            if p.slug == slug:
                return i
        return -1

    def find(self, slug: str) -> Project:
        idx = self.index_of(slug)
        if idx < 0:
            raise ProjectNotFoundError(slug)
        return self.projects[idx]

    def categories(self) -> list[str]:
        """Sorted unique tags across the collection."""
        return sorted({tag for p in self.projects for tag in p.tags})
