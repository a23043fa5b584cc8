"""Renderers for ``:::kind params`` custom containers"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from wmd.core.transform.inline import render_inline
from wmd.core.utils.escape import escape_html


class ContainerKind(str, Enum):
    """The container kinds with dedicated rendering; anything else is generic"""
    summary = "summary"
    notice = "notice"
    infobox = "infobox"
    dropdown = "dropdown"
    desmos = "desmos"
    figure = "figure"
    citations = "citations"
    database = "database"
    quote = "quote"

    @classmethod
    def lookup(cls, name: str) -> Optional["ContainerKind"]:
        """Return the kind for name, or None for an unrecognized kind."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Container:
    """An opened container: its kind as written, params, and interior line span.

    ``lines`` is the enclosing scanner's line sequence; the interior is
    ``lines[start:end]`` and is only sliced when a renderer needs raw text.
    """
    name:   str
    params: str
    lines:  Sequence[str]
    start:  int
    end:    int

    @property
    def kind(self) -> Optional[ContainerKind]:
        return ContainerKind.lookup(self.name)

    @property
    def body(self) -> str:
        return '\n'.join(self.lines[self.start:self.end])


# Second argument renders the interior as ordinary blocks.
Renderer = Callable[[Container, Callable[[], str]], str]

SEPARATOR_RE = re.compile(r'^\|[\s\-|:]+\|$')
CITATION_RE = re.compile(r'^\d+\.')
CITATION_NUM_RE = re.compile(r'^\d+\.\s*')
LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')

DEFAULT_INFOBOX_TITLE = "Quick Facts"
DEFAULT_DESMOS_HEIGHT = 400
DEFAULT_DESMOS_LABEL = "Interactive Graph"
DEFAULT_DATABASE_LIMIT = 5


def split_params(params: str) -> tuple[str, str]:
    """Split ``first | rest`` at the first pipe; rest is '' when there is none."""
    first, _, rest = params.partition('|')
    return first.strip(), rest.strip()


def split_cells(line: str) -> list[str]:
    """Split a ``| a | b |`` row into trimmed cells, dropping empty edge cells."""
    cells = [c.strip() for c in line.strip().split('|')]
    if cells and not cells[0]:
        cells.pop(0)
    if cells and not cells[-1]:
        cells.pop()
    return cells


def is_separator_row(line: str) -> bool:
    return bool(SEPARATOR_RE.match(line.strip()))


def _summary(c: Container, interior: Callable[[], str]) -> str:
    return f'<div class="wiki-summary" role="note"><strong>Summary</strong>{interior()}</div>'


def _notice(c: Container, interior: Callable[[], str]) -> str:
    return f'<div class="admin-notice" role="note">{interior()}</div>'


def _infobox(c: Container, interior: Callable[[], str]) -> str:
    title = c.params.strip() or DEFAULT_INFOBOX_TITLE
    rows = []
    for line in c.body.strip().split('\n'):
        if not line.strip().startswith('|') or is_separator_row(line):
            continue
        cells = [cell for cell in split_cells(line) if cell]
        if len(cells) >= 2:
            rows.append(f'<tr><td>{render_inline(cells[0])}</td><td>{render_inline(cells[1])}</td></tr>')
    rows_html = '\n'.join(rows)
    return (
        '<div class="infobox" aria-label="Quick facts">\n'
        f'  <div class="infobox-title">{escape_html(title)}</div>\n'
        f'  <table>{rows_html}</table>\n'
        '</div>'
    )


def _dropdown(c: Container, interior: Callable[[], str]) -> str:
    return (
        '<div class="wiki-dropdown">\n'
        f'  <button class="wiki-dropdown-trigger" type="button">{escape_html(c.params.strip())}</button>\n'
        f'  <div class="wiki-dropdown-body">{interior()}</div>\n'
        '</div>'
    )


def _desmos_height(text: str) -> int:
    m = LEADING_INT_RE.match(text)
    return (int(m.group(1)) if m else 0) or DEFAULT_DESMOS_HEIGHT


def _desmos(c: Container, interior: Callable[[], str]) -> str:
    if '|' in c.params:
        height_text, label = split_params(c.params)
    else:
        height_text, label = c.params, ''
    height = _desmos_height(height_text)
    label = label or DEFAULT_DESMOS_LABEL

    # Expression and bounds JSON are author-supplied and passed through as-is.
    body_lines = c.body.strip().split('\n')
    expressions = body_lines[0].strip() or '[]'
    bounds = body_lines[1].strip() if len(body_lines) > 1 else ''

    attrs = (
        f'class="desmos-container" data-height="{height}" '
        f'data-label="{escape_html(label)}" data-expressions=\'{expressions}\''
    )
    if bounds:
        attrs += f' data-bounds=\'{bounds}\''
    return f'<div {attrs}></div>'


def _figure(c: Container, interior: Callable[[], str]) -> str:
    src, caption = split_params(c.params)
    figcaption = f'<figcaption>{render_inline(caption)}</figcaption>' if caption else ''
    return (
        '<figure class="wiki-figure">\n'
        f'  <img src="{src}" alt="{escape_html(caption or src)}">\n'
        f'  {figcaption}\n'
        '</figure>'
    )


def _citations(c: Container, interior: Callable[[], str]) -> str:
    entries = [
        CITATION_NUM_RE.sub('', line.strip())
        for line in c.body.strip().split('\n')
        if CITATION_RE.match(line.strip())
    ]
    # Anchors follow list position, so [n] markers can link to #cite-n.
    items = [f'<li id="cite-{i}">{render_inline(e)}</li>' for i, e in enumerate(entries, 1)]
    items_html = '\n'.join(items)
    return (
        '<section class="wiki-citations" aria-labelledby="citations-heading">\n'
        '  <h2 id="citations-heading">References</h2>\n'
        f'  <ol>{items_html}</ol>\n'
        '</section>'
    )


def _database(c: Container, interior: Callable[[], str]) -> str:
    title, src = split_params(c.params)
    title, src = escape_html(title), escape_html(src)
    return (
        f'<div class="wiki-database" data-src="{src}">\n'
        '  <div class="wiki-database-header">\n'
        f'    <span class="wiki-database-title">{title}</span>\n'
        f'    <input class="wiki-database-search" type="search" placeholder="Search&hellip;" aria-label="Search {title}">\n'
        '    <label class="wiki-database-limit-label">Show <input class="wiki-database-limit" type="number" '
        f'min="1" value="{DEFAULT_DATABASE_LIMIT}" aria-label="Maximum results to show"> results</label>\n'
        '  </div>\n'
        '  <div class="wiki-database-body">\n'
        '    <p class="wiki-database-loading">Loading&hellip;</p>\n'
        '  </div>\n'
        '</div>'
    )


def _quote(c: Container, interior: Callable[[], str]) -> str:
    attribution = c.params.strip()
    footer = f'<footer>&mdash; {render_inline(attribution)}</footer>' if attribution else ''
    return f'<blockquote>\n  {interior()}\n  {footer}\n</blockquote>'


def _generic(c: Container, interior: Callable[[], str]) -> str:
    return f'<div class="wmd-{escape_html(c.name)}">{interior()}</div>'


RENDERERS: dict[ContainerKind, Renderer] = {
    ContainerKind.summary:   _summary,
    ContainerKind.notice:    _notice,
    ContainerKind.infobox:   _infobox,
    ContainerKind.dropdown:  _dropdown,
    ContainerKind.desmos:    _desmos,
    ContainerKind.figure:    _figure,
    ContainerKind.citations: _citations,
    ContainerKind.database:  _database,
    ContainerKind.quote:     _quote,
}


def render_container(container: Container, interior: Callable[[], str]) -> str:
    """Render a container with its kind's renderer, or the generic wrapper."""
    kind = container.kind
    if kind is None:
        return _generic(container, interior)
    return RENDERERS[kind](container, interior)
