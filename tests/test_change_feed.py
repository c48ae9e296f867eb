import asyncio

import pytest

from charter.core.change_feed import ChangeEvent, ChangeFeed


class TestChangeFeed:
    @pytest.mark.asyncio
    async def test_subscriber_receives_events_for_its_tables(self):
        feed = ChangeFeed(queue_size=10)

        async with feed.subscribe(["bookings"]) as queue:
            feed.publish("yachts", "UPDATE")
            feed.publish("bookings", "INSERT")
            event = await asyncio.wait_for(queue.get(), timeout=1)

        assert event == ChangeEvent("bookings", "INSERT")
        assert queue.empty()

    @pytest.mark.asyncio
    async def test_unsubscribes_on_exit(self):
        feed = ChangeFeed(queue_size=10)
        async with feed.subscribe(["yachts", "yacht_options"]):
            assert feed.subscriber_count("yachts") == 1
        assert feed.subscriber_count("yachts") == 0
        assert feed.subscriber_count("yacht_options") == 0

    @pytest.mark.asyncio
    async def test_full_queue_drops_oldest(self):
        feed = ChangeFeed(queue_size=2)
        async with feed.subscribe(["promotions"]) as queue:
            feed.publish("promotions", "INSERT")
            feed.publish("promotions", "UPDATE")
            feed.publish("promotions", "DELETE")

            events = [queue.get_nowait(), queue.get_nowait()]

        assert [event.event for event in events] == ["UPDATE", "DELETE"]

    @pytest.mark.asyncio
    async def test_unknown_table(self):
        feed = ChangeFeed(queue_size=10)
        with pytest.raises(ValueError):
            async with feed.subscribe(["passwords"]):
                pass

    def test_publish_without_subscribers(self):
        ChangeFeed(queue_size=1).publish("bookings", "INSERT")
