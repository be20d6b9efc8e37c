"""
Portfolio Notification Hub — Listener Tests

Set-semantics registration, synchronous fan-out, and isolation of
failing listeners through dispatch().
"""

import logging

from portfolio.kernel.events import NotificationHub, dispatch


def boom(payload):
    raise RuntimeError("listener exploded")


class TestRegistration:
    def test_listener_receives_payload(self, recorder):
        hub = NotificationHub()
        hub.add_listener("filter", recorder)
        hub.notify("filter", "talk")
        assert recorder.calls == ["talk"]

    def test_only_matching_event(self, recorder):
        hub = NotificationHub()
        hub.add_listener("filter", recorder)
        hub.notify("pagination", {"currentPage": 2})
        assert recorder.calls == []

    def test_adding_twice_registers_once(self, recorder):
        hub = NotificationHub()
        hub.add_listener("filter", recorder)
        hub.add_listener("filter", recorder)
        hub.notify("filter", "blog")
        assert recorder.calls == ["blog"]
        assert hub.listener_count("filter") == 1

    def test_remove(self, recorder):
        hub = NotificationHub()
        hub.add_listener("filter", recorder)
        hub.remove_listener("filter", recorder)
        hub.notify("filter", "blog")
        assert recorder.calls == []

    def test_remove_unknown_is_noop(self, recorder):
        hub = NotificationHub()
        hub.remove_listener("never-registered", recorder)
        assert hub.listener_count("never-registered") == 0

    def test_notify_without_listeners(self):
        assert NotificationHub().notify("content", []) == 0


class TestFailureIsolation:
    def test_dispatch_reports_failure(self, caplog):
        with caplog.at_level(logging.ERROR, logger="portfolio.kernel.events"):
            assert dispatch(boom, "filter", "talk") is False
        assert "Error in event listener for filter" in caplog.text

    def test_dispatch_reports_success(self, recorder):
        assert dispatch(recorder, "filter", "talk") is True

    def test_failing_listener_does_not_stop_others(self, make_recorder):
        hub = NotificationHub()
        before, after = make_recorder(), make_recorder()
        hub.add_listener("content", before)
        hub.add_listener("content", boom)
        hub.add_listener("content", after)

        failures = hub.notify("content", ["x"])

        assert failures == 1
        assert before.calls == [["x"]]
        assert after.calls == [["x"]]

    def test_listener_can_unsubscribe_during_notify(self, recorder):
        hub = NotificationHub()

        def once(payload):
            hub.remove_listener("filter", once)

        hub.add_listener("filter", once)
        hub.add_listener("filter", recorder)
        hub.notify("filter", "talk")
        hub.notify("filter", "blog")

        assert recorder.calls == ["talk", "blog"]
        assert hub.listener_count("filter") == 1
