"""Category/search filtering of the project collection, and the controller that drives it."""

import logging
import time
from typing import Any, Callable

from portfolio_site.models import FilterState, ProjectCollection

logger = logging.getLogger(__name__)

CLEAR_FILTERS_ACTION = "clear-filters"


def filter_projects(collection: ProjectCollection, state: FilterState) -> ProjectCollection:
    """Projects matching both the category and the search term, in input order."""
    category = state.selected_category
    term = state.search_term

    kept = []
    for project in collection:
        if category and category not in project.tags:
            continue
        if term and term not in project.searchable_text():
            continue
        kept.append(project)
    return ProjectCollection(tuple(kept))


class Debouncer:
    """Delay a callback until calls have stopped for ``wait_ms``.

    Every call restarts the window and replaces the pending arguments. Nothing
    runs on its own: the event loop calls ``poll()`` and the callback fires once
    the window has passed.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        wait_ms: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.callback = callback
        self.wait = wait_ms / 1000.0
        self.clock = clock
        self._deadline: float | None = None
        self._args: tuple[Any, ...] = ()

    def __call__(self, *args: Any) -> None:
        self._args = args
        self._deadline = self.clock() + self.wait

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def poll(self) -> bool:
        """Fire the callback if the quiet window has elapsed. Returns True if it fired."""
        if self._deadline is None or self.clock() < self._deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        if self._deadline is None:
            return False
        args = self._args
        self.cancel()
        self.callback(*args)
        return True

    def cancel(self) -> None:
        self._deadline = None
        self._args = ()


class FilterController:
    """Owns the filter state for the homepage and recomputes the visible projects.

    Category changes apply at once; search input is debounced.
    """

    def __init__(
        self,
        collection: ProjectCollection,
        debounce_ms: int = 300,
        clock: Callable[[], float] = time.monotonic,
        on_change: Callable[[ProjectCollection], None] | None = None,
    ) -> None:
        self.collection = collection
        self.state = FilterState()
        self.visible = collection
        self.on_change = on_change
        self._search = Debouncer(self._apply_search, debounce_ms, clock)

    def set_category(self, category: str) -> ProjectCollection:
        self.state = self.state.model_copy(update={"selected_category": category})
        return self._refresh()

    def search_input(self, raw: str) -> None:
        """Record a keystroke; the filter reruns once input goes quiet."""
        self._search(raw)

    def tick(self) -> bool:
        """Let a pending search fire if its window has elapsed."""
        return self._search.poll()

    def clear_filters(self) -> ProjectCollection:
        self._search.cancel()
        self.state = FilterState()
        return self._refresh()

    def handle_action(self, action: str) -> ProjectCollection:
        """Dispatch a ``data-action`` from a rendered control."""
        if action == CLEAR_FILTERS_ACTION:
            return self.clear_filters()
        raise ValueError(f"Unknown action: {action}")

    def _apply_search(self, raw: str) -> None:
        # FilterState lowercases and trims the term
        self.state = FilterState(
            selected_category=self.state.selected_category, search_term=raw,
        )
        self._refresh()

    def _refresh(self) -> ProjectCollection:
        self.visible = filter_projects(self.collection, self.state)
        logger.debug(
            "Filter %r/%r -> %d of %d projects",
            self.state.selected_category, self.state.search_term,
            len(self.visible), len(self.collection),
        )
        if self.on_change is not None:
            self.on_change(self.visible)
        return self.visible
