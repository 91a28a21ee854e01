import io

from hnreader.delivery import DeliveryChannel
from hnreader.display import ConsoleConsumer, DisplayItem
from hnreader.models import MaterializedItem, RawItem


def test_console_consumer_writes_details() -> None:
    item = MaterializedItem.from_raw(0, RawItem(id=3, by="dang", title="Hello", score=1, type="story"))
    channel = DeliveryChannel(capacity=2, poll_interval=0.01)
    channel.send(item)
    channel.close()
    stream = io.StringIO()

    consumer = ConsoleConsumer(stream=stream)
    assert consumer.run(channel) == 1

    lines = stream.getvalue().splitlines()
    assert lines[0] == "  1. Hello"
    assert lines[1] == "     story by dang | 1 points | https://news.ycombinator.com/item?id=3"
    assert consumer.display.items == [DisplayItem(title="Hello", details=lines[1].strip())]


def test_console_consumer_keeps_its_own_copy_of_rows() -> None:
    channel = DeliveryChannel(capacity=4, poll_interval=0.01)
    for position in range(3):
        channel.send(MaterializedItem.placeholder(position, 100 + position))
    channel.close()

    consumer = ConsoleConsumer(stream=io.StringIO(), show_details=False)
    assert consumer.run(channel) == 3
    assert len(consumer.display) == 3
    assert [entry.title for entry in consumer.display.items] == ["Untitled"] * 3
