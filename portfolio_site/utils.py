"""Small text and URL helpers shared by the renderers and the generator."""

import re
from pathlib import PurePosixPath
from urllib.parse import urlparse

ELLIPSIS = "..."


def truncate(text: str, max_length: int = 100) -> str:
    """Cut text to max_length characters and append an ellipsis when it was longer."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def slugify(text: str) -> str:
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def slug_from_path(path: str) -> str | None:
    """Extract the project slug from a detail page URL or path.

    Handles ``/projects/<slug>.html`` and ``/projects/<slug>/``, with or without
    a base path in front (``/site/projects/<slug>.html``).
    """
    segments = [s for s in urlparse(path).path.split("/") if s]
    for i, segment in enumerate(segments[:-1]):
        if segment == "projects":
            slug = PurePosixPath(segments[i + 1]).stem
            return slug or None
    return None


def project_href(slug: str, prefix: str = "projects/") -> str:
    return f"{prefix}{slug}.html"
