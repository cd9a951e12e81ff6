"""Pytest configuration and shared fixtures for the mdview test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from typing import Any, Callable

import pytest
from utils import FakeHighlighter, FakeTimerFactory

from mdview.renderers.context import RenderContext
from mdview.renderers.registry import default_registry
from mdview.themes.builtin import LIGHT_THEME

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=25)

    import os

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    """Provide a timer factory whose timers fire only on demand."""
    return FakeTimerFactory()


@pytest.fixture
def fake_highlighter() -> FakeHighlighter:
    """Provide an always-available highlighter double."""
    return FakeHighlighter()


@pytest.fixture
def render_ctx() -> Callable[..., RenderContext]:
    """Provide a factory for render contexts over the light theme."""

    def make(**kwargs: Any) -> RenderContext:
        theme = kwargs.pop("theme", LIGHT_THEME)
        overrides = kwargs.pop("overrides", None)
        return default_registry.make_context(theme, overrides=overrides, **kwargs)

    return make


@pytest.fixture
def sample_markdown() -> str:
    """Provide sample markdown touching every common construct.

    Returns
    -------
    str
        Markdown with headings, inline styles, lists, tasks, code, a table,
        a blockquote and a thematic break.

    """
    return """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.

- Item 1
- Item 2

1. First item
2. Second item

- [ ] open task
- [x] done task

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
|:---------|---------:|
| Row 1    | Data 1   |

> quoted text

---
"""
