"""Case-study page rendering.

A section is only produced when its backing field has content; absent sections
do not appear in the tree at all, so the table of contents can be built straight
from ``DetailView.sections``.
"""

from dataclasses import dataclass, field

from portfolio_site.dom import Node, el
from portfolio_site.models import ImageRef, Project


@dataclass
class Section:
    """One rendered narrative section of a case study."""
    id: str  # stable anchor, e.g. "problem-goals"
    title: str
    body: list[Node] = field(default_factory=list)

    def node(self) -> Node:
        return el(
            "section",
            el("h2", self.title, class_="project-section__title"),
            el("div", *self.body, class_="project-section__content"),
            class_="project-section",
            id=self.id,
        )


@dataclass
class DetailView:
    header: Node
    sections: list[Section]

    def node(self) -> Node:
        return el(
            "article",
            self.header,
            *(s.node() for s in self.sections),
            class_="project",
            id="project-detail",
        )


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def _text_or_list(value: str | list[str] | None) -> Node | None:
    """A list renders as bullets, a single string as a paragraph."""
    if isinstance(value, list):
        items = [item for item in value if _has_text(item)]
        if not items:
            return None
        return el("ul", *(el("li", item) for item in items))
    if _has_text(value):
        return el("p", value)
    return None


def _gallery(images: list[ImageRef]) -> Node:
    gallery = el("div", class_="gallery")
    for image in images:
        gallery.append(el(
            "div",
            el("img", src=image.src, alt=image.alt, class_="gallery__image", loading="lazy"),
            el("div", image.caption, class_="gallery__caption") if image.caption else None,
            class_="gallery__item",
        ))
    return gallery


# --- Header ---


def render_header(project: Project) -> Node:
    meta = el("dl", class_="project-header__meta")
    for label, value, node_id in (
        ("Role", project.role, "project-role"),
        ("Year", str(project.year) if project.year else None, "project-year"),
        ("Status", project.status, "project-status"),
    ):
        if _has_text(value):
            meta.append(el("dt", label), el("dd", value, id=node_id))

    tags = None
    if project.tags:
        tags = el("div", *(el("span", t, class_="tag") for t in project.tags), id="project-tags")

    links = el("div", id="project-links")
    for href, label, style in (
        (project.links.live, "Live Demo", "button button--primary"),
        (project.links.repo, "View Code", "button button--secondary"),
        (project.links.figma, "Figma", "button button--secondary"),
    ):
        if href:
            links.append(el("a", label, class_=style, href=href, target="_blank", rel="noopener noreferrer"))

    if project.hero_image:
        hero = el("img", src=project.hero_image, alt=f"{project.display_title} hero image", loading="lazy")
    else:
        hero = el("div", "No image available", class_="project-header__no-image")

    return el(
        "header",
        el("h1", project.display_title, id="project-title"),
        el("p", project.subtitle, id="project-subtitle") if _has_text(project.subtitle) else None,
        meta if meta.children else None,
        tags,
        links if links.children else None,
        el("div", hero, id="project-hero-image"),
        class_="project-header",
    )


# --- Sections, in page order ---


def _overview(project: Project) -> Section | None:
    if not _has_text(project.overview):
        return None
    return Section("overview", "Overview", [el("p", project.overview)])


def _problem_goals(project: Project) -> Section | None:
    body = []
    problem = _text_or_list(project.problem)
    if problem is not None:
        body.append(el("div", el("h3", "Problem"), problem, id="problem-content"))
    goals = _text_or_list(project.goals)
    if goals is not None:
        body.append(el("div", el("h3", "Goals"), goals, id="goals-content"))
    if not body:
        return None
    return Section("problem-goals", "Problem & Goals", body)


def _research(project: Project) -> Section | None:
    research = _text_or_list(project.research)
    if research is None:
        return None
    return Section("research-ux", "Research & UX", [research])


def _design(project: Project) -> Section | None:
    design = project.design
    if design is None:
        return None
    body = []
    if _has_text(design.description):
        body.append(el("p", design.description))
    if design.images:
        body.append(_gallery(design.images))
    if not body:
        return None
    return Section("design", "Design", body)


def _build(project: Project) -> Section | None:
    build = project.build
    if build is None:
        return None
    body = []
    if _has_text(build.description):
        body.append(el("p", build.description))
    features = _text_or_list(build.features)
    if features is not None:
        body.append(features)
    if not body:
        return None
    return Section("build", "Build", body)


def _demo(project: Project) -> Section | None:
    if not _has_text(project.demo):
        return None
    return Section("demo-code", "Demo & Code", [el("p", project.demo)])


def _outcomes(project: Project) -> Section | None:
    metrics = project.metric_outcomes
    if not metrics:
        return None
    tiles = el("div", class_="outcomes")
    for outcome in metrics:
        tiles.append(el(
            "div",
            el("div", outcome.value, class_="outcome-metric__value"),
            el("div", outcome.label, class_="outcome-metric__label"),
            class_="outcome-metric",
        ))
    return Section("outcomes", "Outcomes", [tiles])


def _gallery_section(project: Project) -> Section | None:
    if not project.gallery:
        return None
    return Section("gallery", "Gallery", [_gallery(project.gallery)])


SECTION_BUILDERS = (
    _overview,
    _problem_goals,
    _research,
    _design,
    _build,
    _demo,
    _outcomes,
    _gallery_section,
)


def render_detail(project: Project) -> DetailView:
    sections = [s for s in (builder(project) for builder in SECTION_BUILDERS) if s is not None]
    return DetailView(header=render_header(project), sections=sections)


# --- Failure pages ---


def _error_page(title: str, subtitle: str, description: str, actions: list[Node]) -> Node:
    return el(
        "div",
        el(
            "div",
            el("h1", title, class_="error-page__title"),
            el("h2", subtitle, class_="error-page__subtitle"),
            el("p", description, class_="error-page__description"),
            el("div", *actions, class_="error-page__actions"),
            class_="error-page__container",
        ),
        class_="error-page",
    )


def render_not_found() -> Node:
    return _error_page(
        "404",
        "Project Not Found",
        "The project you're looking for doesn't exist or has been moved.",
        [
            el("a", "Go Home", class_="button button--primary", href="../"),
            el("a", "View Projects", class_="button button--secondary", href="../#projects"),
        ],
    )


def render_load_error() -> Node:
    return _error_page(
        "Error",
        "Something went wrong",
        "Unable to load the project. Please try again later.",
        [
            el("a", "Go Home", class_="button button--primary", href="../"),
            el("a", "Retry", class_="button button--secondary", href=""),
        ],
    )
