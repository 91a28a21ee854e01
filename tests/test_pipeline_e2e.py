import io

import pytest

from conftest import FakeSource
from hnreader import cli
from hnreader.config import ReaderConfig
from hnreader.display import ConsoleConsumer
from hnreader.errors import TransportError
from hnreader.orchestrator import ReaderPipeline
from hnreader.orchestrator import pipeline as pipeline_module


FAST = ReaderConfig(fetch_interval=0, backoff_seconds=0, limit=3)


def test_pipeline_delivers_items_in_identifier_order() -> None:
    source = FakeSource(identifiers=[30, 10, 20, 40])
    with ReaderPipeline(config=FAST, source=source) as pipeline:
        received = list(pipeline.deliveries())
        shared = pipeline.items

    assert [i.identifier for i in received] == [30, 10, 20]
    assert [i.position for i in received] == [0, 1, 2]
    # Observers read the same list the updater wrote, not a copy.
    assert shared.iterate() == tuple(received)
    assert shared.is_filled()


def test_pipeline_cannot_start_twice() -> None:
    pipeline = ReaderPipeline(config=FAST, source=FakeSource(identifiers=[1]))
    pipeline.start()
    try:
        with pytest.raises(RuntimeError):
            pipeline.start()
    finally:
        pipeline.stop()


def test_deliveries_requires_start() -> None:
    with pytest.raises(RuntimeError):
        ReaderPipeline(config=FAST).deliveries()


def test_pipeline_builds_client_from_config(monkeypatch) -> None:  # noqa: ANN001
    built = {}

    def fake_client(**kwargs):  # noqa: ANN003, ANN202
        built.update(kwargs)
        return FakeSource(identifiers=TransportError("offline"))

    monkeypatch.setattr(pipeline_module, "HackerNewsClient", fake_client)
    config = ReaderConfig(feed="new", request_timeout=2.5, base_url="http://hn.local/v0/")
    pipeline = ReaderPipeline(config=config)
    items = pipeline.start()
    pipeline.stop()

    assert built == {"base_url": "http://hn.local/v0/", "feed": "new", "request_timeout": 2.5}
    assert items.limit == 0
    assert not pipeline.running


def test_console_consumer_prints_each_delivery() -> None:
    source = FakeSource(identifiers=[1, 2], titles={1: "First", 2: "Second"})
    stream = io.StringIO()
    consumer = ConsoleConsumer(stream=stream, show_details=False)

    with ReaderPipeline(config=FAST, source=source) as pipeline:
        shown = consumer.run(pipeline.channel)

    assert shown == 2
    assert stream.getvalue() == "  1. First\n  2. Second\n"


def test_cli_main_runs_to_completion(monkeypatch, capsys) -> None:  # noqa: ANN001
    source = FakeSource(identifiers=[5, 6, 7], titles={5: "five", 6: "six", 7: "seven"})
    monkeypatch.setattr(pipeline_module, "HackerNewsClient", lambda **kwargs: source)

    code = cli.main(["--limit", "2", "--interval", "0", "--no-details"])

    assert code == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["  1. five", "  2. six"]
    assert source.calls == [5, 6]


def test_cli_rejects_invalid_configuration() -> None:
    assert cli.main(["--limit", "-1"]) == 2
