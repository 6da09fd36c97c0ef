"""Unit tests for cancellation tokens and the bridge."""

from stream_request_sdk.cancellation import CancellationBridge, CancellationToken


class TestCancellationToken:
    """Test the two-state token."""

    def test_starts_armed(self):
        token = CancellationToken()
        assert not token.fired
        assert token.reason is None

    def test_fire_is_idempotent(self):
        token = CancellationToken()
        assert token.fire("first") is True
        assert token.fire("second") is False
        assert token.fired
        assert token.reason == "first"

    def test_observer_called_once(self):
        token = CancellationToken()
        calls = []
        token.add_observer(calls.append)
        token.fire("stop")
        token.fire("again")
        assert calls == ["stop"]
        assert token.observer_count == 0

    def test_removed_observer_not_called(self):
        token = CancellationToken()
        calls = []
        remove = token.add_observer(calls.append)
        remove()
        remove()
        token.fire()
        assert calls == []

    def test_failing_observer_does_not_block_others(self):
        token = CancellationToken()
        calls = []

        def broken(reason):
            raise RuntimeError("boom")

        token.add_observer(broken)
        token.add_observer(calls.append)
        token.fire("x")
        assert calls == ["x"]


class TestCancellationBridge:
    """Test wiring an external signal into an internal token."""

    def test_no_external_signal(self):
        internal = CancellationToken()
        bridge = CancellationBridge(None, internal).wire()
        assert not bridge.attached
        assert not internal.fired

    def test_pre_fired_signal_fires_immediately(self):
        external, internal = CancellationToken(), CancellationToken()
        external.fire("closed")
        bridge = CancellationBridge(external, internal).wire()
        assert internal.fired
        assert internal.reason == "closed"
        assert not bridge.attached

    def test_signal_fires_internal_token(self):
        external, internal = CancellationToken(), CancellationToken()
        bridge = CancellationBridge(external, internal).wire()
        assert bridge.attached
        external.fire()
        assert internal.fired
        assert internal.reason == "signal"
        assert not bridge.attached

    def test_detach_stops_forwarding(self):
        external, internal = CancellationToken(), CancellationToken()
        bridge = CancellationBridge(external, internal).wire()
        bridge.detach()
        bridge.detach()
        external.fire()
        assert not internal.fired
        assert external.observer_count == 0

    def test_internal_cancel_leaves_signal_alone(self):
        external, internal = CancellationToken(), CancellationToken()
        CancellationBridge(external, internal).wire()
        internal.fire("manual")
        assert not external.fired

    def test_rewiring_does_not_accumulate_observers(self):
        external = CancellationToken()
        for _ in range(5):
            bridge = CancellationBridge(external, CancellationToken()).wire()
            bridge.wire()
            assert external.observer_count == 1
            bridge.detach()
        assert external.observer_count == 0
