"""Configuration loading for the portfolio site."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field


class DataConfig(BaseModel):
    # Tried in order; the first reachable source wins.
    sources: list[str] = Field(default_factory=lambda: [
        "/data/projects.json",
        "./data/projects.json",
        "data/projects.json",
        "/projects.json",
        "./projects.json",
        "projects.json",
    ])
    timeout: float = 5.0
    fallback_pages: list[str] = Field(default_factory=lambda: ["home", "detail"])
    path: str = "data/projects.json"


class FilterConfig(BaseModel):
    debounce_ms: int = 300


class SortConfig(BaseModel):
    secondary_key: Literal["title"] | None = None  # None keeps input order for equal years


class SEOConfig(BaseModel):
    base_url: str = "https://example.github.io"
    author: str = "Portfolio Author"
    site_title: str = "Portfolio Author - Frontend/UI Engineer"
    site_description: str = (
        "Frontend/UI Engineer specializing in modern web development, user experience "
        "design, and accessible interfaces. View my portfolio and case studies."
    )
    job_title: str = "Frontend/UI Engineer"
    default_image: str = "/assets/social-preview.jpg"
    same_as: list[str] = Field(default_factory=list)
    knows_about: list[str] = Field(default_factory=lambda: [
        "Frontend Development", "User Experience Design", "Accessibility",
    ])


class ScrollSpyConfig(BaseModel):
    top_margin: float = 0.2  # fraction of viewport height cut from the top
    bottom_margin: float = 0.7  # fraction cut from the bottom


class BuildConfig(BaseModel):
    output_dir: str = "."
    project_template: str | None = None
    index_template: str | None = None


class Config(BaseModel):
    site_root: str = "."
    preferences_path: str = "data/preferences.json"
    data: DataConfig = Field(default_factory=DataConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    sort: SortConfig = Field(default_factory=SortConfig)
    seo: SEOConfig = Field(default_factory=SEOConfig)
    scroll_spy: ScrollSpyConfig = Field(default_factory=ScrollSpyConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @property
    def resolved_site_root(self) -> Path:
        """Resolve site_root relative to project root."""
        p = Path(self.site_root).expanduser()
        if p.is_absolute():
            return p
        return _project_root() / p

    @property
    def resolved_data_path(self) -> Path:
        return self._under_root(self.data.path)

    @property
    def resolved_output_dir(self) -> Path:
        return self._under_root(self.build.output_dir)

    @property
    def resolved_preferences_path(self) -> Path:
        return self._under_root(self.preferences_path)

    def _under_root(self, value: str) -> Path:
        p = Path(value).expanduser()
        if p.is_absolute():
            return p
        return self.resolved_site_root / p


def _project_root() -> Path:
    """Return the portfolio project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
