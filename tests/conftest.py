"""Shared test fixtures for portfolio site tests."""

import json

import pytest

from portfolio_site.app import AppContext
from portfolio_site.config import BuildConfig, Config, DataConfig, SEOConfig
from portfolio_site.data_access import ResourceUnreachable, SourceResolver, sort_projects
from portfolio_site.models import Project


RECORDS = [
    {
        "slug": "atlas",
        "title": "Atlas Design System",
        "subtitle": "Component library",
        "overview": "Themeable components with accessibility built in.",
        "role": "Lead UI Engineer",
        "status": "Shipped",
        "year": 2024,
        "tags": ["ui", "design-systems"],
        "stack": ["TypeScript", "React"],
        "problem": ["Inconsistent buttons", "Repeated a11y fixes"],
        "goals": ["Single source of truth"],
        "research": "Audited 240 screens.",
        "design": {"description": "Tokens first.", "images": [{"src": "/a.png", "alt": "A", "caption": "Tiers"}]},
        "build": {"description": "Monorepo.", "features": ["Theming", "Docs"]},
        "demo": "Public Storybook.",
        "outcomes": [{"label": "UI bugs", "value": "-45%"}],
        "gallery": [{"src": "/g.png", "alt": "Gallery shot"}],
        "links": {"live": "https://atlas.example", "repo": "https://github.com/x/atlas"},
        "heroImage": "/assets/atlas.jpg",
    },
    {
        "slug": "weather",
        "title": "Weather App",
        "overview": "Forecasts with location-based data.",
        "year": 2023,
        "tags": ["app", "api"],
        "stack": ["JavaScript"],
    },
    {
        "slug": "dashboard",
        "title": "Sales Dashboard",
        "subtitle": "Real-time analytics",
        "overview": "Inventory and customer insights.",
        "year": 2022,
        "tags": ["dashboard", "ui"],
        "stack": ["Chart.js"],
    },
]


def make_project(**overrides) -> Project:
    data = {"slug": "p", "title": "Project"}
    data.update(overrides)
    return Project.model_validate(data)


@pytest.fixture()
def projects():
    return [Project.model_validate(r) for r in RECORDS]


@pytest.fixture()
def collection(projects):
    return sort_projects(projects)


@pytest.fixture()
def site_config(tmp_path):
    """Config rooted at a temp site directory with a data file in place."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "projects.json").write_text(json.dumps({"projects": RECORDS}))
    return Config(
        site_root=str(tmp_path),
        preferences_path="prefs.json",
        data=DataConfig(sources=["/missing/projects.json", "data/projects.json"]),
        seo=SEOConfig(base_url="https://site.example", author="Test Author"),
        build=BuildConfig(output_dir="out"),
    )


@pytest.fixture()
def context(site_config):
    return AppContext.from_config(site_config)


class StubResolver(SourceResolver):
    """In-memory source; ``body=None`` behaves like an unreachable location."""

    def __init__(self, name: str, body: str | None = None) -> None:
        self.name = name
        self.body = body
        self.calls = 0

    @property
    def location(self) -> str:
        return self.name

    def fetch(self) -> str:
        self.calls += 1
        if self.body is None:
            raise ResourceUnreachable(f"{self.name}: gone")
        return self.body
