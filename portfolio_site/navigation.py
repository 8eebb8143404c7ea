"""Prev/next links, homepage card focus, table of contents and scroll spy."""

from dataclasses import dataclass

from portfolio_site.dom import Node, el
from portfolio_site.models import Project, ProjectCollection
from portfolio_site.render.detail import Section
from portfolio_site.utils import project_href


@dataclass(frozen=True)
class Adjacent:
    prev: Project | None = None
    next: Project | None = None


def compute_adjacent(
    collection: ProjectCollection,
    current_slug: str,
    wrap: bool = False,
) -> Adjacent:
    """Neighbours of ``current_slug`` in collection order.

    Detail pages clip at the ends (``wrap=False``); the homepage carousel wraps.
    An unknown slug or a single-project collection has no neighbours.
    """
    idx = collection.index_of(current_slug)
    n = len(collection)
    if idx < 0 or n <= 1:
        return Adjacent()
    if wrap:
        return Adjacent(prev=collection[(idx - 1) % n], next=collection[(idx + 1) % n])
    return Adjacent(
        prev=collection[idx - 1] if idx > 0 else None,
        next=collection[idx + 1] if idx < n - 1 else None,
    )


_FOCUS_STEPS = {"ArrowRight": 1, "ArrowDown": 1, "ArrowLeft": -1, "ArrowUp": -1}


def move_focus(slugs: list[str], current: str, key: str) -> str | None:
    """Slug of the card that should take focus after a key press on the homepage grid."""
    if current not in slugs:
        return None
    idx = slugs.index(current)
    if key in _FOCUS_STEPS:
        return slugs[(idx + _FOCUS_STEPS[key]) % len(slugs)]
    if key == "Home":
        return slugs[0]
    if key == "End":
        return slugs[-1]
    return None


def render_project_nav(adjacent: Adjacent) -> Node | None:
    """Footer with previous/next case-study links; a missing neighbour has no link."""
    if adjacent.prev is None and adjacent.next is None:
        return None
    nav = el("nav", id="project-nav-footer", class_="project-nav", aria_label="Project navigation")
    if adjacent.prev is not None:
        nav.append(el(
            "a",
            el("span", "Previous", class_="project-nav__label"),
            el("span", adjacent.prev.display_title, id="prev-project-title"),
            id="prev-project",
            href=project_href(adjacent.prev.slug, prefix=""),
        ))
    if adjacent.next is not None:
        nav.append(el(
            "a",
            el("span", "Next", class_="project-nav__label"),
            el("span", adjacent.next.display_title, id="next-project-title"),
            id="next-project",
            href=project_href(adjacent.next.slug, prefix=""),
        ))
    return nav


# --- Table of contents ---


@dataclass(frozen=True)
class TocEntry:
    title: str
    anchor: str


def build_toc(sections: list[Section]) -> list[TocEntry]:
    return [TocEntry(title=s.title, anchor=s.id) for s in sections]


def render_toc(entries: list[TocEntry], active: str | None = None) -> Node:
    toc = el("ul", id="toc-list", class_="toc__list")
    for entry in entries:
        cls = "toc__link toc__link--active" if entry.anchor == active else "toc__link"
        toc.append(el("li", el("a", entry.title, class_=cls, href=f"#{entry.anchor}"), class_="toc__item"))
    return toc


class ScrollSpy:
    """Tracks which TOC entry is active as sections scroll through a band of the viewport.

    The band runs from ``top_margin`` of the viewport height down to
    ``1 - bottom_margin``. The last section reported as intersecting wins.
    """

    def __init__(self, entries: list[TocEntry], top_margin: float = 0.2, bottom_margin: float = 0.7) -> None:
        if top_margin + bottom_margin >= 1:
            raise ValueError("Scroll spy margins leave no visible band")
        self.anchors = [e.anchor for e in entries]
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.active: str | None = None

    def band(self, viewport_height: float) -> tuple[float, float]:
        return viewport_height * self.top_margin, viewport_height * (1 - self.bottom_margin)

    def observe(self, entries: list[tuple[str, bool]]) -> str | None:
        """Apply a batch of (anchor, is_intersecting) observations."""
        for anchor, intersecting in entries:
            if intersecting and anchor in self.anchors:
                self.active = anchor
        return self.active

    def update(self, positions: dict[str, tuple[float, float]], viewport_height: float) -> str | None:
        """Recompute from section (top, bottom) offsets relative to the viewport."""
        band_top, band_bottom = self.band(viewport_height)
        observed = []
        for anchor in self.anchors:
            if anchor not in positions:
                continue
            top, bottom = positions[anchor]
            observed.append((anchor, top < band_bottom and bottom > band_top))
        return self.observe(observed)
