"""Test utilities for the mdview test suite.

Node builders and deterministic doubles for timers and highlighters.
"""

from typing import Any, Callable

from mdview.ast.nodes import MarkdownNode
from mdview.fragments import text


def node(node_type: str, *children: MarkdownNode, **attrs: Any) -> MarkdownNode:
    """Terse node builder: positional arguments become children."""
    return MarkdownNode(type=node_type, children=list(children) if children else attrs.pop("children", None), **attrs)


def txt(content: str) -> MarkdownNode:
    return MarkdownNode(type="text", content=content)


class FakeTimer:
    """Timer stand-in that only fires when told to."""

    def __init__(self, delay: float, fn: Callable[[], None]):
        self.delay = delay
        self.fn = fn
        self.started = False
        self.cancelled = False
        self.daemon = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.fn()


class FakeTimerFactory:
    """Records every timer it creates."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, fn: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, fn)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


class FakeHighlighter:
    """Highlighter double recording its render calls."""

    def __init__(self, available: bool = True):
        self.available = available
        self.calls: list[dict[str, Any]] = []

    def is_available(self) -> bool:
        return self.available

    def render(self, code, language="text", options=None, key="code"):
        self.calls.append({"code": code, "language": language, "options": options, "key": key})
        return text(code, key=key, style={"color": "highlighted"})
