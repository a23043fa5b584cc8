"""Block transformer: a line-driven scanner producing an HTML fragment.

Each line is tested against the block grammar in a fixed order and the first
match wins. Quote and container interiors are rendered by a nested scanner.
Unterminated fences consume the rest of their scope instead of failing.
"""

import html
import logging
import re
from typing import Optional, Sequence

from wmd.core.models import Heading
from wmd.core.transform.containers import Container, is_separator_row, render_container, split_cells
from wmd.core.transform.inline import render_inline
from wmd.core.utils.escape import escape_html
from wmd.core.utils.slug import slugify


log = logging.getLogger(__name__)

CONTAINER_OPEN_RE = re.compile(r'^:::(\w+)(.*)', re.ASCII)
CONTAINER_CLOSE = ':::'
MATH_FENCE = '$$'
CODE_FENCE = '```'
HEADING_RES = (
    (4, re.compile(r'^#### (.+)')),
    (3, re.compile(r'^### (.+)')),
    (2, re.compile(r'^## (.+)')),
)
RULE_RE = re.compile(r'^(-{3,}|\*{3,})$')
QUOTE_MARKER_RE = re.compile(r'^>\s?')
BULLET_RE = re.compile(r'^[-*] ')
ORDERED_RE = re.compile(r'^\d+\. ')
TAG_RE = re.compile(r'<[^>]+>')


def _is_quote(trimmed: str) -> bool:
    return trimmed.startswith('> ') or trimmed == '>'


def render_table(rows: Sequence[str]) -> str:
    """Render table rows; separator rows are dropped and the first row is the header."""
    data = [r for r in rows if r.strip().startswith('|') and not is_separator_row(r)]
    if not data:
        return ''

    header, *body = data
    head_cells = ''.join(f'<th>{render_inline(c)}</th>' for c in split_cells(header))
    body_rows = '\n'.join(
        '<tr>' + ''.join(f'<td>{render_inline(c)}</td>' for c in split_cells(row)) + '</tr>'
        for row in body
    )
    return (
        '<table>\n'
        f'  <thead><tr>{head_cells}</tr></thead>\n'
        f'  <tbody>{body_rows}</tbody>\n'
        '</table>'
    )


class BlockScanner:
    """Scan ``lines[start:end]`` with a single forward cursor.

    The line sequence is shared with nested scanners for container interiors;
    only blockquotes build new lines (their markers are stripped).
    """

    def __init__(
        self,
        lines: Sequence[str],
        start: int = 0,
        end: Optional[int] = None,
        headings: Optional[list[Heading]] = None,
        ):
        self.lines = lines
        self.pos = start
        self.end = len(lines) if end is None else end
        self.headings = headings
        self.output: list[str] = []
        self.paragraph: list[str] = []

    def _emit(self, fragment: str) -> None:
        if fragment:
            self.output.append(fragment)

    def _flush_paragraph(self) -> None:
        text = ' '.join(self.paragraph).strip()
        if text:
            self.output.append(f'<p>{render_inline(text)}</p>')
        self.paragraph = []

    def _consume_until(self, closed, what: str) -> tuple[int, int]:
        """Advance past the current opener to the closing line; return the interior span.

        Without a closing line the interior runs to the end of this scope.
        """
        opener = self.pos
        self.pos += 1
        start = self.pos
        while self.pos < self.end and not closed(self.lines[self.pos].strip()):
            self.pos += 1
        stop = self.pos
        if self.pos >= self.end:
            log.debug("Unterminated %s opened at line %d; consumed to end of input", what, opener + 1)
        self.pos += 1
        return start, stop

    def _consume_run(self, matches) -> list[str]:
        """Collect the contiguous run of trimmed lines satisfying matches."""
        run = []
        while self.pos < self.end and matches(self.lines[self.pos].strip()):
            run.append(self.lines[self.pos].strip())
            self.pos += 1
        return run

    def _container(self, m: re.Match) -> None:
        name, params = m.group(1), m.group(2).strip()
        start, stop = self._consume_until(lambda t: t == CONTAINER_CLOSE, f"':::{name}' container")
        container = Container(name=name, params=params, lines=self.lines, start=start, end=stop)

        def interior() -> str:
            return BlockScanner(self.lines, start, stop, self.headings).run()

        self._emit(render_container(container, interior))

    def _math_block(self) -> None:
        start, stop = self._consume_until(lambda t: t == MATH_FENCE, "math block")
        latex = '\n'.join(self.lines[start:stop])
        self._emit(f'<div class="math-block">$${latex}$$</div>')

    def _code_block(self, trimmed: str) -> None:
        lang = trimmed[len(CODE_FENCE):].strip()
        start, stop = self._consume_until(lambda t: t.startswith(CODE_FENCE), "code block")
        code = escape_html('\n'.join(self.lines[start:stop]))
        lang_attr = f' class="language-{escape_html(lang)}"' if lang else ''
        self._emit(f'<pre><code{lang_attr}>{code}</code></pre>')

    def _heading(self, level: int, text: str) -> None:
        inner = render_inline(text)
        if self.headings is not None:
            plain = html.unescape(TAG_RE.sub('', inner))
            self.headings.append(Heading(level=level, text=plain, anchor=slugify(plain)))
        self._emit(f'<h{level}>{inner}</h{level}>')

    def _blockquote(self) -> None:
        quoted = [QUOTE_MARKER_RE.sub('', line, count=1) for line in self._consume_run(_is_quote)]
        inner = BlockScanner(quoted, headings=self.headings).run()
        self._emit(f'<blockquote>{inner}</blockquote>')

    def _list(self, marker: re.Pattern, tag: str) -> None:
        items = ''.join(
            f'<li>{render_inline(marker.sub("", line, count=1))}</li>'
            for line in self._consume_run(marker.match)
        )
        self._emit(f'<{tag}>{items}</{tag}>')

    def _step(self, trimmed: str) -> None:
        """Dispatch one line; every branch advances the cursor."""
        if not trimmed:
            self._flush_paragraph()
            self.pos += 1
            return

        m = CONTAINER_OPEN_RE.match(trimmed)
        if m:
            self._flush_paragraph()
            self._container(m)
            return

        if trimmed == MATH_FENCE:
            self._flush_paragraph()
            self._math_block()
            return

        if trimmed.startswith(MATH_FENCE) and trimmed.endswith(MATH_FENCE) and len(trimmed) > 4:
            self._flush_paragraph()
            self._emit(f'<div class="math-block">{trimmed}</div>')
            self.pos += 1
            return

        if trimmed.startswith(CODE_FENCE):
            self._flush_paragraph()
            self._code_block(trimmed)
            return

        for level, pattern in HEADING_RES:
            hm = pattern.match(trimmed)
            if hm:
                self._flush_paragraph()
                self._heading(level, hm.group(1))
                self.pos += 1
                return

        if RULE_RE.match(trimmed):
            self._flush_paragraph()
            self._emit('<hr>')
            self.pos += 1
            return

        if _is_quote(trimmed):
            self._flush_paragraph()
            self._blockquote()
            return

        if BULLET_RE.match(trimmed):
            self._flush_paragraph()
            self._list(BULLET_RE, 'ul')
            return

        if ORDERED_RE.match(trimmed):
            self._flush_paragraph()
            self._list(ORDERED_RE, 'ol')
            return

        if trimmed.startswith('|'):
            self._flush_paragraph()
            self._emit(render_table(self._consume_run(lambda t: t.startswith('|'))))
            return

        self.paragraph.append(trimmed)
        self.pos += 1

    def run(self) -> str:
        while self.pos < self.end:
            self._step(self.lines[self.pos].strip())
        self._flush_paragraph()
        return '\n'.join(self.output)


def split_lines(text: str) -> tuple[str, ...]:
    return tuple(text.split('\n'))


def render_blocks(text: str, headings: Optional[list[Heading]] = None) -> str:
    """Render a WMD body to an HTML fragment.

    If headings is given, every h2-h4 encountered (nested ones included) is
    appended to it in document order.
    """
    return BlockScanner(split_lines(text), headings=headings).run()


def outline(text: str) -> list[Heading]:
    """Return the h2-h4 headings of a WMD body in document order."""
    headings: list[Heading] = []
    render_blocks(text, headings)
    return headings
