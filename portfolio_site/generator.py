"""Build-time generator: stamps static project pages and the homepage listing.

Reads the project JSON file, renders each case study into the project template,
and writes the listing into ``index.html``. Templates use ``{{TOKEN}}``
placeholders that are replaced verbatim.
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from portfolio_site.app import AppContext, HomePage
from portfolio_site.data_access import ProjectDataError, parse_records, sort_projects, validate_records
from portfolio_site.dom import Node, esc, to_html
from portfolio_site.models import BuildSection, Project, ProjectCollection, ProjectNotFoundError
from portfolio_site.navigation import build_toc, compute_adjacent, render_project_nav, render_toc
from portfolio_site.render.cards import project_icon, render_filters, render_grid, render_results_count
from portfolio_site.render.detail import render_detail
from portfolio_site.utils import slugify

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

LISTING_START = "<!-- projects:start -->"
LISTING_END = "<!-- projects:end -->"
_LISTING_RE = re.compile(re.escape(LISTING_START) + r".*?" + re.escape(LISTING_END), re.DOTALL)


_TOKEN_RE = re.compile(r"\{\{([A-Z_]+)\}\}")


def stamp(template: str, tokens: dict[str, str]) -> str:
    """Replace ``{{NAME}}`` placeholders in one pass. Unknown names are left as is."""
    return _TOKEN_RE.sub(lambda m: tokens.get(m.group(1), m.group(0)), template)


def _html(node: Node | None) -> str:
    return to_html(node, indent=2) if node is not None else ""


def _head_html(nodes: list[Node]) -> str:
    return "\n".join("  " + to_html(n) for n in nodes)


class ProjectGenerator:
    def __init__(self, context: AppContext) -> None:
        self.context = context
        self.config = context.config
        self.data_path = self.config.resolved_data_path
        self.output_dir = self.config.resolved_output_dir
        # Parallel lists in file order. Records are written back as read, so keys
        # the model does not know survive add/remove.
        self.records: list[dict[str, Any]] = []
        self.projects: list[Project] = []

    @property
    def collection(self) -> ProjectCollection:
        return sort_projects(self.projects, self.config.sort.secondary_key)

    # --- Data file ---

    def load(self, allow_empty: bool = False) -> list[Project]:
        try:
            records = parse_records(self.data_path.read_text(encoding="utf-8"))
            projects = validate_records(records)
        except FileNotFoundError:
            if not allow_empty:
                raise ValueError(f"Failed to load projects: {self.data_path} does not exist")
            records, projects = [], []
        except ProjectDataError as e:
            raise ValueError(f"Failed to load projects: {e}") from e
        self.records, self.projects = records, projects

        if not self.projects and not allow_empty:
            raise ValueError(f"No projects found in {self.data_path}")
        logger.info("Loaded %d projects from %s", len(self.projects), self.data_path)
        return self.projects

    def save(self) -> None:
        self.data_path.parent.mkdir(parents=True, exist_ok=True)
        self.data_path.write_text(json.dumps({"projects": self.records}, indent=2, ensure_ascii=False) + "\n")

    def add_project(
        self,
        title: str,
        description: str = "A new project",
        technologies: list[str] | None = None,
        features: list[str] | None = None,
    ) -> Project:
        self.load(allow_empty=True)
        base = slugify(title) or f"project-{len(self.projects) + 1}"
        taken = {p.slug for p in self.projects}
        slug, n = base, 2
        while slug in taken:
            slug, n = f"{base}-{n}", n + 1

        project = Project(
            slug=slug,
            title=title,
            overview=description,
            year=datetime.now().year,
            stack=technologies or [],
            build=BuildSection(features=features) if features else None,
        )
        self.projects.append(project)
        self.records.append(ProjectCollection((project,)).to_records()[0])
        self.save()
        logger.info("Added new project: %s", project.display_title)
        return project

    def remove_project(self, slug: str) -> Project:
        self.load(allow_empty=True)
        for i, project in enumerate(self.projects):
            if project.slug == slug:
                del self.projects[i]
                del self.records[i]
                self.save()
                logger.info("Removed project: %s", project.display_title)
                return project
        raise ProjectNotFoundError(slug)

    # --- Templates ---

    def _template(self, configured: str | None, default_name: str) -> str:
        if configured:
            path = Path(configured)
            if not path.is_absolute():
                path = self.config.resolved_site_root / path
        else:
            path = TEMPLATES_DIR / default_name
        return path.read_text(encoding="utf-8")

    # --- Pages ---

    def project_tokens(self, collection: ProjectCollection, project: Project) -> dict[str, str]:
        writer = self.context.seo_writer()
        writer.apply(project)
        view = render_detail(project)
        adjacent = compute_adjacent(collection, project.slug)
        description = writer.head.meta_content("description") or ""
        theme = self.context.theme

        return {
            "TITLE": esc(writer.head.title),
            "DESCRIPTION": esc(description),
            "HEAD": _head_html(writer.head.nodes()),
            "THEME": theme.current,
            "THEME_LABEL": esc(theme.toggle_label),
            "PROJECT_TITLE": esc(project.display_title),
            "PROJECT_TAGLINE": esc(project.tagline or project.subtitle or ""),
            "PROJECT_DESCRIPTION": esc(project.overview or ""),
            "PROJECT_ICON": project_icon(project.display_title),
            "TECHNOLOGIES": "".join(f'<span class="tech-tag-large">{esc(t)}</span>' for t in project.stack),
            "CONTENT": _html(view.node()),
            "TOC": _html(render_toc(build_toc(view.sections))),
            "NAV": _html(render_project_nav(adjacent)),
            "PREV_TITLE": esc(adjacent.prev.display_title) if adjacent.prev else "",
            "PREV_URL": f"{adjacent.prev.slug}.html" if adjacent.prev else "",
            "NEXT_TITLE": esc(adjacent.next.display_title) if adjacent.next else "",
            "NEXT_URL": f"{adjacent.next.slug}.html" if adjacent.next else "",
        }

    def generate_project_pages(self) -> list[Path]:
        template = self._template(self.config.build.project_template, "project.html")
        collection = self.collection
        out_dir = self.output_dir / "projects"
        out_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for project in collection:
            path = out_dir / f"{project.slug}.html"
            path.write_text(stamp(template, self.project_tokens(collection, project)), encoding="utf-8")
            logger.info("Generated %s", path.name)
            written.append(path)
        return written

    def update_homepage(self) -> Path:
        """Write the listing into index.html between the projects markers.

        A missing index.html is stamped from the index template. An existing one
        without markers is left alone and reported as an error.
        """
        page = HomePage(self.context, collection=self.collection)
        filters = page.filters
        parts = {
            "FILTERS": _html(render_filters(filters.collection.categories(), filters.state)),
            "COUNT": _html(render_results_count(len(filters.visible), len(filters.collection))),
            "GRID": _html(render_grid(filters.visible)),
        }
        listing = "\n".join(parts.values())
        block = f"{LISTING_START}\n{listing}\n{LISTING_END}"

        index_path = self.output_dir / "index.html"
        if index_path.exists():
            current = index_path.read_text(encoding="utf-8")
            if not _LISTING_RE.search(current):
                raise ValueError(f"{index_path} has no {LISTING_START} ... {LISTING_END} block")
            updated = _LISTING_RE.sub(lambda _: block, current, count=1)
        else:
            writer = self.context.seo_writer()
            writer.apply_homepage()
            seo = self.config.seo
            updated = stamp(self._template(self.config.build.index_template, "index.html"), {
                "TITLE": esc(seo.site_title),
                "DESCRIPTION": esc(seo.site_description),
                "HEAD": _head_html(writer.head.nodes()),
                "THEME": self.context.theme.current,
                "THEME_LABEL": esc(self.context.theme.toggle_label),
                "PROJECTS": listing,
                **parts,
            })

        index_path.parent.mkdir(parents=True, exist_ok=True)
        index_path.write_text(updated, encoding="utf-8")
        logger.info("Updated homepage with project data")
        return index_path

    def build(self) -> list[Path]:
        """Load the data file and regenerate every page."""
        logger.info("Starting portfolio project generation...")
        self.load()
        pages = self.generate_project_pages()
        pages.append(self.update_homepage())
        logger.info("Generated %d project pages", len(pages) - 1)
        return pages
