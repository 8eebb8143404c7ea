"""Homepage rendering: project cards, filter controls, and empty/error panels."""

from portfolio_site.dom import Node, el
from portfolio_site.filtering import CLEAR_FILTERS_ACTION
from portfolio_site.models import FilterState, Project, ProjectCollection
from portfolio_site.utils import project_href, truncate

SUBTITLE_LENGTH = 80
DESCRIPTION_LENGTH = 120
MAX_CARD_TAGS = 4
PLACEHOLDER_THUMBNAIL = "/assets/placeholder-project.jpg"

_ICONS = {
    "E-Commerce": "🛒",
    "Weather": "🌤️",
    "Task Management": "✅",
    "Portfolio": "💼",
    "Dashboard": "📊",
    "App": "📱",
}


def project_icon(title: str) -> str:
    """Pick an emoji for a project by keyword in its title."""
    lowered = title.lower()
    for keyword, icon in _ICONS.items():
        if keyword.lower() in lowered:
            return icon
    return "🚀"


def _external_link(href: str, label: str, class_: str) -> Node:
    return el("a", label, class_=class_, href=href, target="_blank", rel="noopener noreferrer")


def render_summary(project: Project, href_prefix: str = "projects/") -> Node:
    """Summary card for the projects grid."""
    overview = project.overview or ""

    image = el(
        "div",
        el(
            "img",
            class_="card__image",
            src=project.thumbnail or PLACEHOLDER_THUMBNAIL,
            alt=f"{project.display_title} project thumbnail",
            loading="lazy",
            width=400,
            height=200,
        ),
        class_="card__image-container",
    )

    tags = el("div", class_="card__tags")
    for tag in project.tags[:MAX_CARD_TAGS]:
        tags.append(el("span", tag, class_="tag"))
    if len(project.tags) > MAX_CARD_TAGS:
        tags.append(el("span", f"+{len(project.tags) - MAX_CARD_TAGS} more", class_="tag tag--more"))

    actions = el(
        "div",
        el(
            "a", "View Case Study",
            class_="button button--primary card__action",
            href=project_href(project.slug, href_prefix),
        ),
        class_="card__actions",
    )
    secondary = el("div", class_="card__secondary-actions")
    if project.links.live:
        secondary.append(_external_link(project.links.live, "Live Demo", "button button--secondary card__action"))
    if project.links.repo:
        secondary.append(_external_link(project.links.repo, "Code", "button button--secondary card__action"))
    if secondary.children:
        actions.append(secondary)

    subtitle = project.subtitle or truncate(overview, SUBTITLE_LENGTH)
    content = el(
        "div",
        el("h3", project.display_title, class_="card__title"),
        el("p", subtitle, class_="card__subtitle") if subtitle else None,
        el("p", truncate(overview, DESCRIPTION_LENGTH), class_="card__description") if overview else None,
        tags,
        actions,
        class_="card__content",
    )

    return el("article", image, content, class_="card", data_project_slug=project.slug, tabindex=0)


def render_no_results() -> Node:
    """Empty-state panel. The button's action is handled by the filter controller."""
    return el(
        "div",
        el("h3", "No projects found"),
        el("p", "Try adjusting your search or filter criteria"),
        el(
            "button", "Clear Filters",
            class_="button button--primary", type="button", data_action=CLEAR_FILTERS_ACTION,
        ),
        class_="projects__no-results",
    )


def render_error_panel() -> Node:
    return el(
        "div",
        el("h3", "Unable to load projects"),
        el("p", "Please check your internet connection and try again"),
        el("a", "Retry", class_="button button--primary", href=""),
        class_="projects__error",
        role="alert",
    )


def render_results_count(shown: int, total: int) -> Node:
    return el("div", f"Showing {shown} of {total} projects", class_="projects__count")


def render_grid(visible: ProjectCollection) -> Node:
    grid = el("div", id="projects-grid", class_="projects__grid")
    if len(visible) == 0:
        return grid.append(render_no_results())
    for project in visible:
        grid.append(render_summary(project))
    return grid


def render_filters(categories: list[str], state: FilterState) -> Node:
    select = el("select", id="category-filter", name="category", aria_label="Filter by category")
    select.append(el("option", "All Projects", value=""))
    for category in categories:
        option = el("option", category, value=category)
        if category == state.selected_category:
            option.attrs["selected"] = "selected"
        select.append(option)

    search = el(
        "input",
        id="search-filter",
        type="search",
        name="search",
        placeholder="Search projects...",
        value=state.search_term,
        aria_label="Search projects",
    )
    return el("div", select, search, class_="projects__filters")


def render_listing(collection: ProjectCollection, visible: ProjectCollection, state: FilterState) -> Node:
    """Filters, result count and grid for the projects section."""
    return el(
        "section",
        render_filters(collection.categories(), state),
        render_results_count(len(visible), len(collection)),
        render_grid(visible),
        class_="projects",
        id="projects",
    )
