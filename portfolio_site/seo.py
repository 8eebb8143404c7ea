"""Title, meta, canonical and JSON-LD tags for each page.

``HeadDocument`` models the tags of a page ``<head>``. ``SEOWriter`` updates
existing tags in place and only appends a tag the first time it is needed, so
applying the same project twice leaves the head unchanged.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from portfolio_site.config import SEOConfig
from portfolio_site.dom import Node, Raw, el
from portfolio_site.models import Project

logger = logging.getLogger(__name__)


@dataclass
class MetaTag:
    attr: str  # "name" or "property"
    key: str
    content: str


@dataclass
class HeadDocument:
    title: str = ""
    meta: list[MetaTag] = field(default_factory=list)
    canonical: str | None = None
    json_ld: dict[str, Any] | None = None

    def get_meta(self, key: str) -> MetaTag | None:
        for tag in self.meta:
            if tag.key == key:
                return tag
        return None

    def meta_content(self, key: str) -> str | None:
        tag = self.get_meta(key)
        return tag.content if tag else None

    def count_meta(self, key: str) -> int:
        return sum(1 for tag in self.meta if tag.key == key)

    def nodes(self) -> list[Node]:
        nodes = [el("meta", charset="utf-8"), el("title", self.title)]
        nodes += [el("meta", **{tag.attr: tag.key, "content": tag.content}) for tag in self.meta]
        if self.canonical:
            nodes.append(el("link", rel="canonical", href=self.canonical))
        if self.json_ld is not None:
            # Keep "</script>" inside string values from closing the tag
            body = json.dumps(self.json_ld, indent=2, ensure_ascii=False).replace("</", "<\\/")
            nodes.append(el("script", Raw(body), type="application/ld+json", id="json-ld"))
        return nodes


def _drop_empty(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v not in (None, "", [])}


class SEOWriter:
    """Writes page metadata into a ``HeadDocument``."""

    def __init__(self, config: SEOConfig, head: HeadDocument | None = None) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.head = head if head is not None else HeadDocument()

    # --- Primitive updates ---

    def update_title(self, title: str) -> None:
        self.head.title = title

    def update_meta(self, key: str, content: str | None) -> None:
        """Set a meta tag's content, creating it on first use. Empty content is ignored."""
        if not content:
            return
        tag = self.head.get_meta(key)
        if tag is not None:
            tag.content = content
            return
        attr = "property" if key.startswith(("og:", "twitter:")) else "name"
        self.head.meta.append(MetaTag(attr=attr, key=key, content=content))

    def update_open_graph(self, title: str, description: str, image: str, url: str, type_: str = "website") -> None:
        self.update_meta("og:title", title)
        self.update_meta("og:description", description)
        self.update_meta("og:image", image)
        self.update_meta("og:url", url)
        self.update_meta("og:type", type_)

    def update_twitter_card(self, title: str, description: str, image: str, url: str,
                            card: str = "summary_large_image") -> None:
        self.update_meta("twitter:card", card)
        self.update_meta("twitter:title", title)
        self.update_meta("twitter:description", description)
        self.update_meta("twitter:image", image)
        self.update_meta("twitter:url", url)

    def update_json_ld(self, data: dict[str, Any]) -> None:
        self.head.json_ld = data

    def set_canonical(self, url: str) -> None:
        self.head.canonical = url

    def init(self) -> None:
        """Baseline tags every page carries."""
        if self.head.get_meta("viewport") is None:
            self.update_meta("viewport", "width=device-width, initial-scale=1.0")
        self.update_meta("robots", "index, follow")

    # --- Page-level ---

    def absolute(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def apply(self, project: Project) -> None:
        """Project page metadata."""
        author = self.config.author
        title = f"{project.display_title} - {author}"
        description = project.overview or project.subtitle or f"A project by {author}: {project.display_title}"
        image = self.absolute(project.hero_image or self.config.default_image)
        url = self.absolute(f"projects/{project.slug}.html")

        self.update_title(title)
        self.update_meta("description", description)
        self.update_open_graph(title, description, image, url, type_="article")
        self.update_twitter_card(title, description, image, url)
        self.set_canonical(url)

        data = _drop_empty({
            "@context": "https://schema.org",
            "@type": "CreativeWork",
            "name": project.display_title,
            "description": description,
            "author": {"@type": "Person", "name": author, "url": self.base_url},
            "url": url,
            "image": image,
            "dateCreated": f"{project.year}-01-01" if project.year else None,
            "keywords": ", ".join(project.tags),
            "about": project.overview,
        })
        if project.links.live:
            data["mainEntityOfPage"] = {"@type": "WebPage", "url": project.links.live}
        self.update_json_ld(data)
        logger.debug("Applied SEO tags for %s", project.slug)

    def apply_homepage(self) -> None:
        cfg = self.config
        url = self.base_url + "/"
        image = self.absolute(cfg.default_image)

        self.update_title(cfg.site_title)
        self.update_meta("description", cfg.site_description)
        self.update_open_graph(cfg.site_title, cfg.site_description, image, url, type_="website")
        self.update_twitter_card(cfg.site_title, cfg.site_description, image, url)
        self.set_canonical(url)
        self.update_json_ld(_drop_empty({
            "@context": "https://schema.org",
            "@type": "Person",
            "name": cfg.author,
            "jobTitle": cfg.job_title,
            "url": url,
            "sameAs": cfg.same_as,
            "knowsAbout": cfg.knows_about,
        }))

    def apply_not_found(self) -> None:
        title = f"Page Not Found - {self.config.author}"
        description = "The page you're looking for doesn't exist."
        self.update_title(title)
        self.update_meta("description", description)
        self.update_meta("robots", "noindex")
        self.update_open_graph(
            title, description, self.absolute(self.config.default_image), self.absolute("404.html"),
        )
