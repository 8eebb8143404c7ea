"""Application context and the homepage / project page controllers."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

import requests

from portfolio_site.config import Config
from portfolio_site.data_access import DataExhaustedError, ProjectDataError, ProjectLoader
from portfolio_site.dom import Node, el, to_html
from portfolio_site.filtering import FilterController
from portfolio_site.models import PageType, ProjectCollection, ProjectNotFoundError
from portfolio_site.navigation import ScrollSpy, TocEntry, build_toc, compute_adjacent, render_project_nav, render_toc
from portfolio_site.render.cards import render_error_panel, render_listing
from portfolio_site.render.detail import render_detail, render_load_error, render_not_found
from portfolio_site.seo import HeadDocument, SEOWriter
from portfolio_site.theme import PreferenceStore, ThemeController
from portfolio_site.utils import slug_from_path

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything the pages share, built once and passed around explicitly."""
    config: Config
    loader: ProjectLoader
    theme: ThemeController

    @classmethod
    def from_config(
        cls,
        config: Config,
        session: requests.Session | None = None,
        prefers_dark: bool = False,
    ) -> "AppContext":
        return cls(
            config=config,
            loader=ProjectLoader.from_config(config, session=session),
            theme=ThemeController(PreferenceStore(config.resolved_preferences_path), prefers_dark),
        )

    def seo_writer(self) -> SEOWriter:
        writer = SEOWriter(self.config.seo, HeadDocument())
        writer.init()
        return writer


@dataclass
class Page:
    head: HeadDocument
    main: Node
    status: str = "ok"  # ok | not_found | error
    toc: list[TocEntry] = field(default_factory=list)
    scroll_spy: ScrollSpy | None = None


class HomePage:
    def __init__(
        self,
        context: AppContext,
        collection: ProjectCollection | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self.clock = clock
        self.collection = collection
        self.filters: FilterController | None = None
        self.error: Exception | None = None
        if collection is not None:
            self._init_filters()

    def load(self) -> None:
        try:
            self.collection = self.context.loader.load(PageType.HOME)
        except (DataExhaustedError, ProjectDataError) as e:
            logger.error("Error initializing homepage: %s", e)
            self.error = e
            return
        self._init_filters()

    def _init_filters(self) -> None:
        self.filters = FilterController(
            self.collection,
            debounce_ms=self.context.config.filters.debounce_ms,
            clock=self.clock,
        )

    def render(self) -> Page:
        if self.collection is None and self.error is None:
            self.load()

        writer = self.context.seo_writer()
        writer.apply_homepage()

        if self.filters is None:
            main = el("main", render_error_panel(), class_="main")
            return Page(head=writer.head, main=main, status="error")

        listing = render_listing(self.filters.collection, self.filters.visible, self.filters.state)
        main = el(
            "main",
            el("h1", self.context.config.seo.site_title, class_="hero__title"),
            listing,
            class_="main",
        )
        return Page(head=writer.head, main=main)


class ProjectPage:
    def __init__(self, context: AppContext) -> None:
        self.context = context

    def render(self, path: str) -> Page:
        writer = self.context.seo_writer()
        try:
            collection = self.context.loader.load(PageType.DETAIL)
        except (DataExhaustedError, ProjectDataError) as e:
            logger.error("Error initializing project page: %s", e)
            return Page(head=writer.head, main=el("main", render_load_error(), class_="main"), status="error")

        slug = slug_from_path(path)
        try:
            if slug is None:
                raise ProjectNotFoundError(path)
            project = collection.find(slug)
        except ProjectNotFoundError as e:
            logger.warning("%s", e)
            writer.apply_not_found()
            return Page(head=writer.head, main=el("main", render_not_found(), class_="main"), status="not_found")

        return self.render_project(collection, project.slug, writer)

    def render_project(self, collection: ProjectCollection, slug: str, writer: SEOWriter | None = None) -> Page:
        writer = writer or self.context.seo_writer()
        project = collection.find(slug)
        writer.apply(project)

        view = render_detail(project)
        toc = build_toc(view.sections)
        spy_cfg = self.context.config.scroll_spy
        spy = ScrollSpy(toc, top_margin=spy_cfg.top_margin, bottom_margin=spy_cfg.bottom_margin)

        main = el(
            "main",
            view.node(),
            el("aside", el("h2", "Contents", class_="toc__title"), render_toc(toc), class_="toc") if toc else None,
            render_project_nav(compute_adjacent(collection, slug)),
            class_="main",
        )
        return Page(head=writer.head, main=main, toc=toc, scroll_spy=spy)


def render_document(page: Page, theme: ThemeController) -> str:
    """Full HTML document for a page, with the theme toggle in the site header."""
    head = el("head", *page.head.nodes())
    site_header = el(
        "header",
        el("a", "Home", class_="site-header__home", href="/"),
        el(
            "button",
            el("span", "☀️" if theme.current == "dark" else "🌙", class_="theme-toggle__icon"),
            class_="theme-toggle",
            type="button",
            aria_label=theme.toggle_label,
        ),
        class_="site-header",
    )
    body = el("body", site_header, page.main)
    html = el("html", head, body, lang="en", data_theme=theme.current)
    return "<!DOCTYPE html>\n" + to_html(html, indent=2) + "\n"
