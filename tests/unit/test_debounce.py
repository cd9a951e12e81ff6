#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for debounced parsing."""

import pytest

from mdview.ast.nodes import MarkdownNode, ParseResult
from mdview.parsers.debounce import DebouncedParser, DebounceScheduler


class RecordingParse:
    """Parser double that records the content of every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, content, options):
        self.calls.append(content)
        return ParseResult.ok([MarkdownNode(type="document", content=content)])


@pytest.mark.unit
class TestDebounceScheduler:
    """Test the single-slot scheduler."""

    def test_schedule_starts_daemon_timer(self, timer_factory):
        scheduler = DebounceScheduler(timer_factory)
        scheduler.schedule(lambda: None, 0.5)
        timer = timer_factory.last
        assert timer.started
        assert timer.daemon
        assert timer.delay == 0.5
        assert scheduler.pending

    def test_newer_call_cancels_older(self, timer_factory):
        calls = []
        scheduler = DebounceScheduler(timer_factory)
        scheduler.schedule(lambda: calls.append("first"), 0.1)
        scheduler.schedule(lambda: calls.append("second"), 0.1)
        first, second = timer_factory.timers
        assert first.cancelled
        # A cancelled timer that fires anyway must not run
        first.fire()
        second.fire()
        assert calls == ["second"]
        assert not scheduler.pending

    def test_cancel(self, timer_factory):
        calls = []
        scheduler = DebounceScheduler(timer_factory)
        scheduler.schedule(lambda: calls.append(1), 0.1)
        scheduler.cancel()
        timer_factory.last.fire()
        assert calls == []

    def test_closed_scheduler_refuses_work(self, timer_factory):
        scheduler = DebounceScheduler(timer_factory)
        scheduler.close()
        assert scheduler.closed
        with pytest.raises(RuntimeError):
            scheduler.schedule(lambda: None, 0.1)


@pytest.mark.unit
class TestDebouncedParser:
    """Test deferred re-parsing."""

    def test_initial_content_parsed_immediately(self, timer_factory):
        parse = RecordingParse()
        live = DebouncedParser("# One", parse=parse, timer_factory=timer_factory)
        assert parse.calls == ["# One"]
        assert live.result.nodes[0].content == "# One"
        assert timer_factory.timers == []

    def test_only_newest_content_parsed(self, timer_factory):
        parse = RecordingParse()
        results = []
        live = DebouncedParser("a", parse=parse, timer_factory=timer_factory, on_result=results.append)
        live.update("ab")
        live.update("abc")
        assert live.content == "abc"
        assert live.result.nodes[0].content == "a"
        for timer in timer_factory.timers:
            timer.fire()
        assert parse.calls == ["a", "abc"]
        assert live.result.nodes[0].content == "abc"
        assert [r.nodes[0].content for r in results] == ["abc"]

    def test_flush(self, timer_factory):
        parse = RecordingParse()
        live = DebouncedParser("a", parse=parse, timer_factory=timer_factory)
        live.update("b")
        assert live.pending
        assert live.flush().nodes[0].content == "b"
        assert not live.pending
        timer_factory.last.fire()
        assert parse.calls == ["a", "b"]

    def test_flush_without_pending_does_not_parse(self, timer_factory):
        parse = RecordingParse()
        live = DebouncedParser("a", parse=parse, timer_factory=timer_factory)
        live.flush()
        assert parse.calls == ["a"]

    def test_close_discards_pending(self, timer_factory):
        parse = RecordingParse()
        with DebouncedParser("a", parse=parse, timer_factory=timer_factory) as live:
            live.update("b")
        timer_factory.last.fire()
        assert live.result.nodes[0].content == "a"

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            DebouncedParser("", delay=-1, parse=RecordingParse())

    def test_default_parser(self, timer_factory):
        pytest.importorskip("mistune")
        live = DebouncedParser("# Title", timer_factory=timer_factory)
        assert live.result.success
        assert live.result.nodes[0].children[0].type == "heading"
