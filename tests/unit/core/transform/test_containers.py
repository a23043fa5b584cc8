"""Unit tests for core/transform/containers.py"""

import pytest

from wmd.core.transform.blocks import render_blocks
from wmd.core.transform.containers import (
    RENDERERS, Container, ContainerKind, split_cells, split_params,
)


# --- kind lookup / dispatch table ---

def test_every_kind_has_a_renderer():
    """The dispatch table covers the whole ContainerKind enumeration."""
    assert set(RENDERERS) == set(ContainerKind)


@pytest.mark.parametrize("name,expected", [
    ("summary", ContainerKind.summary),
    ("quote",   ContainerKind.quote),
    ("Summary", None),
    ("aside",   None),
])
def test_kind_lookup(name, expected):
    assert ContainerKind.lookup(name) is expected


def test_container_body_slices_shared_lines():
    lines = ("before", "a", "b", "after")
    c = Container(name="notice", params="", lines=lines, start=1, end=3)
    assert c.body == "a\nb"
    assert c.kind is ContainerKind.notice


@pytest.mark.parametrize("params,expected", [
    ("a | b",       ("a", "b")),
    ("a|b|c",       ("a", "b|c")),
    ("  only  ",    ("only", "")),
    ("",            ("", "")),
    (" | tail",     ("", "tail")),
])
def test_split_params(params, expected):
    """Params split on the first pipe only."""
    assert split_params(params) == expected


def test_split_cells_drops_edge_cells_only():
    assert split_cells("| a | | b |") == ["a", "", "b"]
    assert split_cells("a | b") == ["a", "b"]


# --- renderers ---

def test_summary():
    html = render_blocks(":::summary\nShort **note**.\n:::")
    assert html == (
        '<div class="wiki-summary" role="note"><strong>Summary</strong>'
        '<p>Short <strong>note</strong>.</p></div>'
    )


def test_notice_flushes_preceding_paragraph():
    html = render_blocks("para\n:::notice\nx\n:::")
    assert html == '<p>para</p>\n<div class="admin-notice" role="note"><p>x</p></div>'


def test_infobox_rows():
    """Key/value rows become a two-column fact table; separators are skipped."""
    html = render_blocks(":::infobox\n| Born | 1643 |\n|---|---|\n| Field | *Physics* |\nignored line\n:::")
    assert html == (
        '<div class="infobox" aria-label="Quick facts">\n'
        '  <div class="infobox-title">Quick Facts</div>\n'
        '  <table><tr><td>Born</td><td>1643</td></tr>\n'
        '<tr><td>Field</td><td><em>Physics</em></td></tr></table>\n'
        '</div>'
    )


def test_infobox_skips_rows_with_empty_cells():
    """Empty cells are dropped before pairing, so a row needs two filled cells."""
    html = render_blocks(":::infobox\n| | value |\n| Born | | 1643 |\n:::")
    assert "<td></td>" not in html
    assert html == (
        '<div class="infobox" aria-label="Quick facts">\n'
        '  <div class="infobox-title">Quick Facts</div>\n'
        '  <table><tr><td>Born</td><td>1643</td></tr></table>\n'
        '</div>'
    )


def test_infobox_only_empty_cells_has_no_rows():
    html = render_blocks(":::infobox\n| | value |\n:::")
    assert "<tr>" not in html
    assert "  <table></table>\n" in html


def test_infobox_custom_title_escaped():
    html = render_blocks(":::infobox Newton <1643>\n:::")
    assert '<div class="infobox-title">Newton &lt;1643&gt;</div>' in html


def test_dropdown():
    html = render_blocks(":::dropdown Example 1\nContent **here**.\n:::")
    assert html == (
        '<div class="wiki-dropdown">\n'
        '  <button class="wiki-dropdown-trigger" type="button">Example 1</button>\n'
        '  <div class="wiki-dropdown-body"><p>Content <strong>here</strong>.</p></div>\n'
        '</div>'
    )


def test_unterminated_dropdown_consumes_rest():
    """A dropdown without a closing line takes the rest of the document as its body."""
    html = render_blocks(":::dropdown My Title\n## Inside\ntext")
    assert html == (
        '<div class="wiki-dropdown">\n'
        '  <button class="wiki-dropdown-trigger" type="button">My Title</button>\n'
        '  <div class="wiki-dropdown-body"><h2>Inside</h2>\n<p>text</p></div>\n'
        '</div>'
    )


def test_desmos_with_bounds():
    """Expressions and bounds JSON are passed through verbatim."""
    html = render_blocks(
        ':::desmos 300 | Parabola\n'
        '[{"id":"f","latex":"y=x^2","color":"#2563eb"}]\n'
        '{"left":-5,"right":5}\n'
        ':::'
    )
    assert html == (
        '<div class="desmos-container" data-height="300" data-label="Parabola" '
        'data-expressions=\'[{"id":"f","latex":"y=x^2","color":"#2563eb"}]\' '
        'data-bounds=\'{"left":-5,"right":5}\'></div>'
    )


def test_desmos_defaults():
    html = render_blocks(":::desmos\n:::")
    assert html == (
        '<div class="desmos-container" data-height="400" data-label="Interactive Graph" '
        'data-expressions=\'[]\'></div>'
    )


@pytest.mark.parametrize("params,height,label", [
    ("250",             "250", "Interactive Graph"),
    ("abc | Slope",     "400", "Slope"),
    ("0 | Zero",        "400", "Zero"),
    ("320px | Px",      "320", "Px"),
    ("| Only label",    "400", "Only label"),
    ("500 |",           "500", "Interactive Graph"),
])
def test_desmos_params(params, height, label):
    html = render_blocks(f":::desmos {params}\n[]\n:::")
    assert f'data-height="{height}"' in html
    assert f'data-label="{label}"' in html


def test_figure_with_caption():
    html = render_blocks(":::figure ../media/a.png | A *cat*\n:::")
    assert html == (
        '<figure class="wiki-figure">\n'
        '  <img src="../media/a.png" alt="A *cat*">\n'
        '  <figcaption>A <em>cat</em></figcaption>\n'
        '</figure>'
    )


def test_figure_without_caption_uses_path_as_alt():
    html = render_blocks(":::figure img.png\n:::")
    assert '<img src="img.png" alt="img.png">' in html
    assert "<figcaption>" not in html


def test_citations_renumbered_by_position():
    """Only numbered lines become references; source numbers are dropped."""
    html = render_blocks(":::citations\n3. Newton, I. *Principia*.\nnot a citation\n7.Second.\n:::")
    assert html == (
        '<section class="wiki-citations" aria-labelledby="citations-heading">\n'
        '  <h2 id="citations-heading">References</h2>\n'
        '  <ol><li id="cite-1">Newton, I. <em>Principia</em>.</li>\n'
        '<li id="cite-2">Second.</li></ol>\n'
        '</section>'
    )


def test_citations_anchor_ids_follow_position():
    html = render_blocks(":::citations\n12. First.\n4. Second.\n9. Third.\n:::")
    ids = [f'<li id="cite-{i}">' for i in (1, 2, 3)]
    assert all(i in html for i in ids)
    assert 'id="cite-12"' not in html


def test_database_placeholder():
    html = render_blocks(":::database Elements | data/elements.json\n:::")
    assert html.startswith('<div class="wiki-database" data-src="data/elements.json">')
    assert '<span class="wiki-database-title">Elements</span>' in html
    assert 'aria-label="Search Elements"' in html
    assert 'value="5"' in html
    assert '<p class="wiki-database-loading">' in html


def test_database_without_path():
    html = render_blocks(":::database Lonely\n:::")
    assert 'data-src=""' in html
    assert '<span class="wiki-database-title">Lonely</span>' in html


def test_quote_with_attribution():
    html = render_blocks(":::quote Isaac **Newton**\nIf I have seen further...\n:::")
    assert html == (
        '<blockquote>\n'
        '  <p>If I have seen further...</p>\n'
        '  <footer>&mdash; Isaac <strong>Newton</strong></footer>\n'
        '</blockquote>'
    )


def test_quote_without_attribution():
    html = render_blocks(":::quote\nx\n:::")
    assert "<footer>" not in html
    assert "<p>x</p>" in html


def test_unknown_kind_uses_generic_wrapper():
    """Unrecognized kinds still render their interior as blocks."""
    html = render_blocks(":::aside extra params\n**x**\n:::")
    assert html == '<div class="wmd-aside"><p><strong>x</strong></p></div>'


def test_first_closing_line_ends_the_container():
    """Containers close at the first ::: line; an inner opener cannot extend them."""
    html = render_blocks(":::dropdown Outer\n:::notice\ninner\n:::\nafter\n:::")
    assert '<div class="wiki-dropdown-body"><div class="admin-notice" role="note"><p>inner</p></div></div>' in html
    assert html.endswith("<p>after :::</p>")


def test_containers_in_sequence():
    html = render_blocks(":::notice\na\n:::\n:::summary\nb\n:::")
    assert html.split("\n") == [
        '<div class="admin-notice" role="note"><p>a</p></div>',
        '<div class="wiki-summary" role="note"><strong>Summary</strong><p>b</p></div>',
    ]
