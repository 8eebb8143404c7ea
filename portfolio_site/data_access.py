"""Load the project list from an ordered list of candidate sources.

Each source is tried once, in order. The first one that answers wins; a failing
source is logged and skipped. When every source fails, pages that are allowed to
show sample content get the embedded fallback list instead.
"""

import abc
import json
import logging
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError

from portfolio_site.config import Config
from portfolio_site.models import PageType, Project, ProjectCollection

logger = logging.getLogger(__name__)


class ResourceUnreachable(Exception):
    """A single candidate source could not be read."""


class DataExhaustedError(RuntimeError):
    """Every candidate failed and no fallback exists for the page type."""

    def __init__(self, tried: list[str]) -> None:
        super().__init__(f"Unable to load projects. Tried: {', '.join(tried)}")
        self.tried = tried


class ProjectDataError(ValueError):
    """A source answered but its body is not a valid project document."""


# --- Resolvers ---


class SourceResolver(abc.ABC):
    """One candidate location for the project document."""

    @property
    @abc.abstractmethod
    def location(self) -> str:
        ...

    @abc.abstractmethod
    def fetch(self) -> str:
        """Return the raw document body.

        Raises:
            ResourceUnreachable: if the source is missing or answers with an error.
        """
        ...


class FileResolver(SourceResolver):
    """A path under the site root. A leading ``/`` means the site root itself."""

    def __init__(self, candidate: str, site_root: Path) -> None:
        self.candidate = candidate
        self.path = site_root / candidate.lstrip("/")

    @property
    def location(self) -> str:
        return self.candidate

    def fetch(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceUnreachable(f"{self.path}: {e.strerror or e}") from e


class HttpResolver(SourceResolver):
    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def location(self) -> str:
        return self.url

    def fetch(self) -> str:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ResourceUnreachable(f"{self.url}: {e}") from e
        if not resp.ok:
            raise ResourceUnreachable(f"{self.url}: HTTP {resp.status_code}")
        return resp.text


def resolvers_from_config(
    config: Config,
    session: requests.Session | None = None,
) -> list[SourceResolver]:
    """Build resolvers for ``config.data.sources``, in order.

    All HTTP sources share one session.
    """
    resolvers: list[SourceResolver] = []
    root = config.resolved_site_root
    for candidate in config.data.sources:
        if candidate.startswith(("http://", "https://")):
            if session is None:
                session = requests.Session()
            resolvers.append(HttpResolver(candidate, timeout=config.data.timeout, session=session))
        else:
            resolvers.append(FileResolver(candidate, root))
    return resolvers


# --- Parsing + ordering ---


def parse_records(body: str) -> list[dict[str, Any]]:
    """Raw record dicts from a ``{"projects": [...]}`` document, keys untouched."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ProjectDataError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProjectDataError("Project document must be a JSON object")
    records = data.get("projects") or []
    if not isinstance(records, list):
        raise ProjectDataError("'projects' must be a list")
    return records


def validate_records(records: list[dict[str, Any]]) -> list[Project]:
    try:
        return [Project.model_validate(r) for r in records]
    except ValidationError as e:
        raise ProjectDataError(f"Invalid project record: {e}") from e


def parse_projects(body: str) -> list[Project]:
    """Parse a ``{"projects": [...]}`` document."""
    return validate_records(parse_records(body))


def sort_projects(
    projects: list[Project],
    secondary_key: str | None = None,
) -> ProjectCollection:
    """Sort by year, newest first. Projects without a year go last.

    Equal years keep their input order unless ``secondary_key`` is given, in
    which case they are ordered by that field (case-insensitive).
    """
    ordered = list(projects)
    if secondary_key:
        ordered.sort(key=lambda p: str(getattr(p, secondary_key, "") or "").lower())
    ordered.sort(key=lambda p: (p.year is None, -(p.year or 0)))
    return ProjectCollection(tuple(ordered))


# --- Loader ---


class ProjectLoader:
    """Fetches the project collection once and caches it."""

    def __init__(
        self,
        resolvers: list[SourceResolver],
        fallback: list[dict[str, Any]] | None = None,
        fallback_pages: list[str] | None = None,
        secondary_key: str | None = None,
    ) -> None:
        self.resolvers = resolvers
        self.fallback = FALLBACK_PROJECTS if fallback is None else fallback
        self.fallback_pages = {PageType(p) for p in (fallback_pages or [])}
        self.secondary_key = secondary_key
        self.source: str | None = None
        self._cache: ProjectCollection | None = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        session: requests.Session | None = None,
    ) -> "ProjectLoader":
        return cls(
            resolvers_from_config(config, session=session),
            fallback_pages=config.data.fallback_pages,
            secondary_key=config.sort.secondary_key,
        )

    def load(self, page: PageType = PageType.HOME) -> ProjectCollection:
        """Return the sorted collection.

        Raises:
            DataExhaustedError: every source failed and ``page`` has no fallback.
            ProjectDataError: the first reachable source held invalid data.
        """
        if self._cache is not None:
            return self._cache

        tried: list[str] = []
        for resolver in self.resolvers:
            tried.append(resolver.location)
            logger.info("Trying to load projects from: %s", resolver.location)
            try:
                body = resolver.fetch()
            except ResourceUnreachable as e:
                logger.warning("Failed to load from %s: %s", resolver.location, e)
                continue
            projects = parse_projects(body)
            logger.info("Loaded %d projects from %s", len(projects), resolver.location)
            self.source = resolver.location
            self._cache = sort_projects(projects, self.secondary_key)
            return self._cache

        if page in self.fallback_pages and self.fallback:
            logger.warning("All project sources failed; using embedded fallback list")
            self.source = "fallback"
            projects = [Project.model_validate(r) for r in self.fallback]
            # The fallback is not cached so a later load can still reach real data
            return sort_projects(projects, self.secondary_key)

        raise DataExhaustedError(tried)


FALLBACK_PROJECTS: list[dict[str, Any]] = [
    {
        "slug": "e-commerce-dashboard",
        "title": "E-Commerce Dashboard",
        "subtitle": "Admin dashboard for e-commerce operations",
        "overview": (
            "A comprehensive admin dashboard for managing e-commerce operations with "
            "real-time analytics, inventory management, and customer insights. Built "
            "with modern web technologies and responsive design principles."
        ),
        "year": 2024,
        "tags": ["dashboard", "data-viz"],
        "stack": ["HTML", "CSS", "JavaScript", "Chart.js"],
        "build": {"features": [
            "Real-time analytics", "Responsive design", "Interactive charts", "Data visualization",
        ]},
    },
    {
        "slug": "weather-app",
        "title": "Weather App",
        "subtitle": "Current conditions and forecasts",
        "overview": (
            "A clean, intuitive weather application that provides current conditions and "
            "forecasts. Features location-based weather data, beautiful animations, and a "
            "minimal interface that focuses on essential information."
        ),
        "year": 2023,
        "tags": ["app", "api"],
        "stack": ["HTML", "CSS", "JavaScript", "Weather API"],
        "build": {"features": [
            "Location-based data", "5-day forecast", "Beautiful animations", "Minimal design",
        ]},
    },
    {
        "slug": "task-management-tool",
        "title": "Task Management Tool",
        "subtitle": "Drag-and-drop task organisation",
        "overview": (
            "A productivity-focused task management application with drag-and-drop "
            "functionality, project organization, and team collaboration features. "
            "Designed for efficiency and ease of use."
        ),
        "year": 2023,
        "tags": ["app", "productivity"],
        "stack": ["HTML", "CSS", "JavaScript", "Local Storage"],
        "build": {"features": [
            "Drag & drop", "Project organization", "Team collaboration", "Data persistence",
        ]},
    },
    {
        "slug": "portfolio-website",
        "title": "Portfolio Website",
        "subtitle": "Responsive portfolio with dark mode",
        "overview": (
            "A responsive portfolio website showcasing creative work and professional "
            "experience. Features smooth animations, dark mode support, and optimized "
            "performance across all devices."
        ),
        "year": 2022,
        "tags": ["ui", "website"],
        "stack": ["HTML", "CSS", "JavaScript", "GSAP"],
        "build": {"features": [
            "Responsive design", "Dark mode", "Smooth animations", "Performance optimized",
        ]},
    },
]
