"""Inline transformer: code/math protection, emphasis, strikethrough and links.

Pass order matters. Code and math spans are frozen into a per-call
``SlotStore`` first so that later rewriting never touches them, literal text
is escaped, the emphasis and link passes run, and finally every placeholder
is swapped back for its frozen HTML.
"""

import re

from wmd.core.utils.escape import escape_html


PLACEHOLDER = '\x00'
PLACEHOLDER_RE = re.compile(r'\x00(\d+)\x00')

CODE_RE = re.compile(r'`([^`\n]+)`')
MATH_RE = re.compile(r'(?<!\$)\$([^$\n]+)\$(?!\$)')

BOLD_ITALIC_RE = re.compile(r'\*\*\*([^*\n]+)\*\*\*')
BOLD_RE = re.compile(r'\*\*([^*\n]+)\*\*')
ITALIC_RE = re.compile(r'\*([^*\n]+)\*')
STRIKE_RE = re.compile(r'~~([^~\n]+)~~')
LINK_RE = re.compile(r'\[([^\]\n]+)\]\(([^)\n]+)\)')

EXTERNAL_RE = re.compile(r'^https?://')
EXTERNAL_ATTRS = ' target="_blank" rel="noopener noreferrer"'


class SlotStore:
    """Ordered store of frozen HTML, addressed by placeholder index."""

    def __init__(self) -> None:
        self._slots: list[str] = []

    def __len__(self) -> int:
        return len(self._slots)

    def protect(self, html: str) -> str:
        """Store html and return the placeholder token that stands in for it."""
        self._slots.append(html)
        return f'{PLACEHOLDER}{len(self._slots) - 1}{PLACEHOLDER}'

    def restore(self, text: str) -> str:
        return PLACEHOLDER_RE.sub(lambda m: self._slots[int(m.group(1))], text)


def _link(m: re.Match) -> str:
    text, href = m.group(1), m.group(2)
    attrs = EXTERNAL_ATTRS if EXTERNAL_RE.match(href) else ''
    return f'<a href="{href}"{attrs}>{text}</a>'


def render_inline(text: str) -> str:
    """Render one logical line of WMD inline markup to HTML.

    Unmatched delimiters are left as literal (escaped) text.
    """
    slots = SlotStore()
    text = text.replace(PLACEHOLDER, '')

    text = CODE_RE.sub(lambda m: slots.protect(f'<code>{escape_html(m.group(1))}</code>'), text)
    text = MATH_RE.sub(lambda m: slots.protect(m.group(0)), text)

    # Placeholders are NUL + digits, untouched by escaping.
    text = escape_html(text)

    text = BOLD_ITALIC_RE.sub(r'<strong><em>\1</em></strong>', text)
    text = BOLD_RE.sub(r'<strong>\1</strong>', text)
    text = ITALIC_RE.sub(r'<em>\1</em>', text)
    text = STRIKE_RE.sub(r'<del>\1</del>', text)
    text = LINK_RE.sub(_link, text)

    return slots.restore(text)
