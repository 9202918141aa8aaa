"""
HTML rendering of documents.

Block and mark renderers are looked up by type in two registries. Types
without a renderer fall through to the defaults: blocks render as <p>,
marks render their content unchanged. Hosts register their own types with
the block_renderer / mark_renderer decorators.
"""

from __future__ import annotations
import html
from typing import Callable

from .document import (
    Block,
    Document,
    Mark,
    Node,
    Text,
    BLOCK_QUOTE,
    BULLETED_LIST,
    HEADING_ONE,
    HEADING_TWO,
    LIST_ITEM,
    NUMBERED_LIST,
    IMAGE,
    BOLD,
    CODE,
    ITALIC,
    UNDERLINED,
)


BlockRenderer = Callable[[Block, str], str]
MarkRenderer = Callable[[Mark, str], str]

_block_renderers: dict[str, BlockRenderer] = {}
_mark_renderers: dict[str, MarkRenderer] = {}


def block_renderer(*types: str) -> Callable[[BlockRenderer], BlockRenderer]:
    def decorator(func: BlockRenderer) -> BlockRenderer:
        for type in types:
            _block_renderers[type] = func
        return func
    return decorator


def mark_renderer(*types: str) -> Callable[[MarkRenderer], MarkRenderer]:
    def decorator(func: MarkRenderer) -> MarkRenderer:
        for type in types:
            _mark_renderers[type] = func
        return func
    return decorator


def _tag(name: str) -> BlockRenderer:
    return lambda block, children: f"<{name}>{children}</{name}>"


_block_renderers.update({
    BLOCK_QUOTE: _tag("blockquote"),
    BULLETED_LIST: _tag("ul"),
    HEADING_ONE: _tag("h1"),
    HEADING_TWO: _tag("h2"),
    LIST_ITEM: _tag("li"),
    NUMBERED_LIST: _tag("ol"),
})

_mark_renderers.update({
    BOLD: lambda mark, children: f"<strong>{children}</strong>",
    CODE: lambda mark, children: f"<code>{children}</code>",
    ITALIC: lambda mark, children: f"<em>{children}</em>",
    UNDERLINED: lambda mark, children: f"<u>{children}</u>",
})


@block_renderer(IMAGE)
def render_image(block: Block, children: str) -> str:
    src = html.escape(str(block.data.get("src", "")), quote=True)
    return f'<img src="{src}" />'


def render_node(block: Block, children: str) -> str:
    renderer = _block_renderers.get(block.type)
    if renderer is None:
        return f"<p>{children}</p>"
    return renderer(block, children)


def render_mark(mark: Mark, children: str) -> str:
    renderer = _mark_renderers.get(mark.type)
    if renderer is None:
        return children
    return renderer(mark, children)


def render_text(text: Text) -> str:
    out = html.escape(text.text, quote=False)
    for mark in sorted(text.marks):
        out = render_mark(mark, out)
    return out


def _render(node: Node) -> str:
    if isinstance(node, Text):
        return render_text(node)
    return render_node(node, "".join(_render(child) for child in node.nodes))


def render_html(document: Document) -> str:
    return "".join(_render(node) for node in document.nodes)
