"""Tests for SubscriberHub."""

from datetime import datetime, timezone

import pytest

from app.portfolio.errors import SinkClosedError
from app.portfolio.hub import SubscriberHub
from app.portfolio.valuation import compute_snapshot


class RecordingSink:
    """Sink stub that records payloads and can be told to fail."""

    def __init__(self, ready=True, error=None):
        self.ready = ready
        self.error = error
        self.received = []

    def send(self, payload):
        if self.error is not None:
            raise self.error
        self.received.append(payload)


@pytest.fixture
def snapshot(sample_registry):
    return compute_snapshot(sample_registry.all_sectors(), {}, datetime(2024, 7, 1, tzinfo=timezone.utc))


class TestSubscriberHub:
    """Unit tests for the hub."""

    def test_register_and_unregister(self):
        """Test registering and unregistering sinks."""
        hub = SubscriberHub()
        sink = RecordingSink()
        hub.register(sink)
        assert sink in hub
        assert len(hub) == 1
        hub.unregister(sink)
        assert sink not in hub

    def test_unregister_unknown_is_noop(self):
        """Test unregistering a sink that was never registered."""
        SubscriberHub().unregister(RecordingSink())  # Should not raise

    def test_register_twice_counts_once(self):
        """Test that registration is idempotent."""
        hub = SubscriberHub()
        sink = RecordingSink()
        hub.register(sink)
        hub.register(sink)
        assert len(hub) == 1

    def test_publish_sends_identical_payloads(self, snapshot):
        """Test that all sinks receive byte-identical payloads."""
        hub = SubscriberHub()
        a, b = RecordingSink(), RecordingSink()
        hub.register(a)
        hub.register(b)

        assert hub.publish(snapshot) == 2
        assert a.received == b.received == [snapshot.to_json()]

    def test_publish_with_no_sinks(self, snapshot):
        """Test publishing to nobody still records the snapshot."""
        hub = SubscriberHub()
        assert hub.publish(snapshot) == 0
        assert hub.latest is snapshot

    def test_not_ready_sink_is_skipped_and_kept(self, snapshot):
        """Test that a sink that is not ready misses the cycle but stays live."""
        hub = SubscriberHub()
        waiting = RecordingSink(ready=False)
        hub.register(waiting)

        assert hub.publish(snapshot) == 0
        assert waiting.received == []
        assert waiting in hub

    @pytest.mark.parametrize("error", [SinkClosedError("gone"), ConnectionResetError(), RuntimeError("closed")])
    def test_failing_sink_is_removed(self, snapshot, error):
        """Test that a sink whose send fails is dropped without affecting others."""
        hub = SubscriberHub()
        broken, healthy = RecordingSink(error=error), RecordingSink()
        hub.register(broken)
        hub.register(healthy)

        assert hub.publish(snapshot) == 1
        assert broken not in hub
        assert healthy in hub
        assert healthy.received == [snapshot.to_json()]

    def test_latest_tracks_last_publish(self, sample_registry, snapshot):
        """Test the last-published snapshot cache."""
        hub = SubscriberHub()
        assert hub.latest is None
        hub.publish(snapshot)
        newer = compute_snapshot(sample_registry.all_sectors(), {}, datetime(2024, 7, 2, tzinfo=timezone.utc))
        hub.publish(newer)
        assert hub.latest is newer
        assert hub.published == 2

    def test_late_joiner_gets_no_replay(self, snapshot):
        """Test that registering after a publish does not deliver the old snapshot."""
        hub = SubscriberHub()
        hub.publish(snapshot)
        late = RecordingSink()
        hub.register(late)
        assert late.received == []
