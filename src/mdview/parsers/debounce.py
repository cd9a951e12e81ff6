#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdview/parsers/debounce.py
"""Debounced parsing for live-preview style editing.

``DebounceScheduler`` holds at most one pending timer: scheduling a new call
cancels the previous one, so only the newest content is ever parsed.
``DebouncedParser`` builds on it, parsing the initial content synchronously and
re-parsing on ``update()`` once the content has been stable for ``delay``
seconds.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from mdview.ast.nodes import ParseResult
from mdview.constants import DEFAULT_DEBOUNCE_DELAY
from mdview.options.parser import ParserOptions
from mdview.parsers.markdown import parse_markdown

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Any]
ParseFunction = Callable[[str, Optional[ParserOptions]], ParseResult]


class DebounceScheduler:
    """Single-slot timer: the newest scheduled call wins.

    Parameters
    ----------
    timer_factory : callable, default threading.Timer
        ``factory(delay, fn)`` returning an object with ``start()`` and
        ``cancel()``; replaceable for deterministic tests

    """

    def __init__(self, timer_factory: Optional[TimerFactory] = None):
        self._timer_factory: TimerFactory = timer_factory or threading.Timer
        self._lock = threading.Lock()
        self._timer: Any = None
        self._generation = 0
        self._closed = False

    @property
    def pending(self) -> bool:
        """Whether a call is waiting to fire."""
        with self._lock:
            return self._timer is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, fn: Callable[[], None], delay: float) -> None:
        """Run ``fn`` after ``delay`` seconds, cancelling any pending call.

        Raises
        ------
        RuntimeError
            If the scheduler has been closed

        """
        with self._lock:
            if self._closed:
                raise RuntimeError("DebounceScheduler is closed")
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            timer = self._timer_factory(delay, lambda: self._fire(generation, fn))
            if hasattr(timer, "daemon"):
                timer.daemon = True
            self._timer = timer
        timer.start()

    def _fire(self, generation: int, fn: Callable[[], None]) -> None:
        with self._lock:
            # A timer that lost a cancel race must not run
            if self._closed or generation != self._generation:
                return
            self._timer = None
        fn()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._generation += 1

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            self._cancel_locked()

    def close(self) -> None:
        """Cancel the pending call and refuse further scheduling."""
        with self._lock:
            self._cancel_locked()
            self._closed = True


class DebouncedParser:
    """Parse markdown, deferring re-parses until edits settle.

    Parameters
    ----------
    content : str
        Initial content, parsed immediately
    options : ParserOptions, optional
        Parser options forwarded on every parse
    delay : float, default 0.3
        Quiet period in seconds before a re-parse
    on_result : callable, optional
        Called with each new ``ParseResult`` after a deferred parse
    parse : callable, optional
        Parser collaborator ``parse(content, options) -> ParseResult``
    timer_factory : callable, optional
        Forwarded to ``DebounceScheduler``

    Examples
    --------
        >>> with DebouncedParser("# Draft", delay=0.3) as live:
        ...     live.update("# Draft 2")
        ...     live.flush().nodes[0].children[0].type
        'heading'

    """

    def __init__(
        self,
        content: str = "",
        options: Optional[ParserOptions] = None,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        on_result: Optional[Callable[[ParseResult], None]] = None,
        parse: Optional[ParseFunction] = None,
        timer_factory: Optional[TimerFactory] = None,
    ):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.options = options
        self.delay = delay
        self.on_result = on_result
        self._parse: ParseFunction = parse or parse_markdown
        self._scheduler = DebounceScheduler(timer_factory)
        self._lock = threading.Lock()
        self._content = content
        self._result = self._parse(content, options)

    @property
    def content(self) -> str:
        """The most recently supplied content."""
        return self._content

    @property
    def result(self) -> ParseResult:
        """The most recently committed parse result."""
        with self._lock:
            return self._result

    @property
    def pending(self) -> bool:
        return self._scheduler.pending

    def update(self, content: str) -> None:
        """Supply new content; it is parsed after the quiet period."""
        self._content = content
        self._scheduler.schedule(lambda: self._commit(content), self.delay)

    def _commit(self, content: str) -> None:
        result = self._parse(content, self.options)
        with self._lock:
            if self._scheduler.closed:
                return
            self._result = result
        logger.debug("Committed debounced parse of %d characters", len(content))
        if self.on_result is not None:
            self.on_result(result)

    def flush(self) -> ParseResult:
        """Parse any pending content now and return the current result."""
        if self._scheduler.pending:
            self._scheduler.cancel()
            self._commit(self._content)
        return self.result

    def close(self) -> None:
        """Cancel any pending parse; later timer callbacks never commit."""
        self._scheduler.close()

    def __enter__(self) -> DebouncedParser:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
