from inappbrowser.browser.events import BrowserFinished, BrowserPageLoaded, EventBus


def test_event_bus_delivers_to_every_subscriber():
    bus = EventBus()
    first = []
    second = []
    bus.subscribe(first.append)
    bus.subscribe(second.append)

    bus.publish(BrowserPageLoaded("b-1"))

    assert first == [BrowserPageLoaded("b-1")]
    assert second == [BrowserPageLoaded("b-1")]


def test_event_bus_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(received.append)

    unsubscribe()
    unsubscribe()
    bus.publish(BrowserFinished("b-1"))

    assert received == []


def test_event_bus_subscriber_failure_does_not_block_others():
    bus = EventBus()
    received = []

    def _broken(_event):
        raise RuntimeError("listener failed")

    bus.subscribe(_broken)
    bus.subscribe(received.append)

    bus.publish(BrowserFinished("b-1"))

    assert received == [BrowserFinished("b-1")]

