"""Shared fixtures: a small content tree with an About page and a blog post"""

import logging
import os

import pytest


ABOUT_MD = """\
+++
title = "About"
+++

Hi, I write firmware for small microcontrollers.
"""

POST_MD = """\
+++
title = "Embedded firmware optimization tips"
date = 2024-03-02
draft = false

[taxonomies]
tags = ["embedded", "c", "performance"]

[extra]
toc = true
comment = false
+++

## Use fixed-point math

Avoid floats on parts without an FPU.

```c
int32_t q15_mul(int16_t a, int16_t b) { return ((int32_t)a * b) >> 15; }
```

## Keep ISRs short

Set a flag and return.

```asm
    bx lr
```
"""

DRAFT_MD = """\
---
title: Linker scripts
date: 2024-05-10
draft: true
tags: [embedded]
---

Work in progress.
"""


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """content/ with about.md, blog/firmware-tips.md, and a YAML draft."""
    root = tmp_path / "content"
    (root / "blog").mkdir(parents=True)
    (root / "about.md").write_text(ABOUT_MD, encoding="utf-8")
    (root / "blog" / "firmware-tips.md").write_text(POST_MD, encoding="utf-8")
    (root / "blog" / "linker-scripts.md").write_text(DRAFT_MD, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MDSITE_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("MDSITE_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attached to streams that CliRunner has since closed."""
    yield
    logger = logging.getLogger("mdsite")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
