"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_WMD = """\
---
title: Derivatives
category: mathematics
tags: math, calculus
featured: true
---
## Definition

The derivative of $f$ measures **change**.

:::dropdown Worked example
### Power rule
- $x^2$ becomes $2x$
:::

#### Notes
"""


@pytest.fixture(name="sample_wmd")
def sample_wmd_fixture():
    return SAMPLE_WMD


@pytest.fixture(name="write_article")
def write_article_fixture(tmp_path):
    """Write a .wmd file under tmp_path and return its path."""
    def _write(name: str, text: str = SAMPLE_WMD):
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return p
    return _write
