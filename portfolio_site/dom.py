"""Element tree returned by the renderers, and the adapter that turns it into HTML.

Render functions build ``Node`` trees instead of writing markup directly, so the
logic that decides *what* appears on a page can be tested by walking the tree.
``to_html`` is the only place that produces markup.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterator, Union

VOID_TAGS = frozenset({"meta", "link", "img", "input", "br", "hr", "source"})


class Raw(str):
    """Text that is already safe to emit verbatim (e.g. a JSON-LD body)."""


Child = Union["Node", str]


@dataclass
class Node:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Child] = field(default_factory=list)

    def append(self, *children: "Child | None") -> "Node":
        for child in children:
            if child is not None:
                self.children.append(child)
        return self

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    def iter(self) -> Iterator["Node"]:
        """Depth-first walk over this node and all element descendants."""
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.iter()

    def find(self, predicate: Callable[["Node"], bool]) -> "Node | None":
        for node in self.iter():
            if predicate(node):
                return node
        return None

    def find_by_id(self, node_id: str) -> "Node | None":
        return self.find(lambda n: n.id == node_id)

    def find_all(self, tag: str | None = None, class_: str | None = None) -> list["Node"]:
        return [
            n for n in self.iter()
            if (tag is None or n.tag == tag) and (class_ is None or class_ in n.classes)
        ]

    def text(self) -> str:
        parts: list[str] = []
        for child in self.children:
            parts.append(child.text() if isinstance(child, Node) else str(child))
        return "".join(parts)


def _attr_name(name: str) -> str:
    if name == "class_":
        return "class"
    return name.replace("_", "-")


def el(tag: str, *children: "Child | None", **attrs: "str | int | None") -> Node:
    """Build a node. ``class_`` becomes ``class``; other underscores become hyphens."""
    node = Node(tag, {_attr_name(k): str(v) for k, v in attrs.items() if v is not None})
    node.append(*children)
    return node


def esc(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def to_html(node: Child, indent: int | None = None) -> str:
    """Serialise a tree to markup. Pass ``indent`` for one element per line."""
    if isinstance(node, Raw):
        return str(node)
    if isinstance(node, str):
        return esc(node)

    attrs = "".join(f' {k}="{esc(v)}"' for k, v in node.attrs.items())
    open_tag = f"<{node.tag}{attrs}>"
    if node.tag in VOID_TAGS:
        return open_tag

    if indent is None or not any(isinstance(c, Node) for c in node.children):
        inner = "".join(to_html(c) for c in node.children)
        return f"{open_tag}{inner}</{node.tag}>"

    pad = " " * indent
    lines = [open_tag]
    for child in node.children:
        for line in to_html(child, indent).splitlines():
            lines.append(pad + line)
    lines.append(f"</{node.tag}>")
    return "\n".join(lines)
