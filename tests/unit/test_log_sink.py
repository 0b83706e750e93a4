"""Tests for the diagnostic LogSink."""

import threading

from symbo.utils.log_sink import LogSink


def test_messages_keep_order():
    sink = LogSink()
    sink.add("one")
    sink.add_many(["two", "three"])
    assert sink.messages == ["one", "two", "three"]
    assert list(sink) == ["one", "two", "three"]
    assert len(sink) == 3
    assert sink.text() == "one\ntwo\nthree"


def test_messages_is_a_copy():
    sink = LogSink()
    sink.add("one")
    sink.messages.append("mutated")
    assert sink.messages == ["one"]


def test_reset_clears_and_notifies():
    snapshots = []
    sink = LogSink(listener=snapshots.append)
    sink.add("one")
    sink.reset()
    assert sink.messages == []
    assert snapshots == [["one"], []]


def test_empty_batch_does_not_notify():
    snapshots = []
    sink = LogSink(listener=snapshots.append)
    sink.add_many([])
    assert snapshots == []


def test_batches_stay_contiguous_across_threads():
    sink = LogSink()

    def worker(n):
        sink.add_many([f"{n}-a", f"{n}-b", f"{n}-c"])

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    messages = sink.messages
    assert len(messages) == 60
    for index in range(0, 60, 3):
        prefix = messages[index].split("-")[0]
        assert messages[index : index + 3] == [f"{prefix}-a", f"{prefix}-b", f"{prefix}-c"]
