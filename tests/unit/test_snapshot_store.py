import threading

from iperf3_statuspage.store import SnapshotStore
from iperf3_statuspage.types import RawDocument


def test_store_is_empty_before_first_publish() -> None:
    store = SnapshotStore()

    assert store.read() is None
    assert store.snapshot() is None


def test_read_returns_most_recent_publish() -> None:
    store = SnapshotStore()
    first = RawDocument(b'{"run": 1}')
    second = RawDocument(b'{"run": 2}')

    store.publish(first)
    assert store.read() == first

    snapshot = store.publish(second)
    assert store.read() == second
    assert snapshot.sequence == 2
    assert store.snapshot() is snapshot


def test_reader_view_is_stable_across_publish() -> None:
    store = SnapshotStore()
    store.publish(RawDocument(b'{"value": "old"}'))

    held = store.read()
    store.publish(RawDocument(b'{"value": "new"}'))

    assert held is not None
    assert held.body == b'{"value": "old"}'
    assert store.read().body == b'{"value": "new"}'


def test_concurrent_reads_see_whole_documents_only() -> None:
    store = SnapshotStore()
    old = RawDocument(b'{"a": 1, "b": 1}')
    new = RawDocument(b'{"a": 2, "b": 2}')
    store.publish(old)

    seen: set[bytes] = set()
    seen_lock = threading.Lock()
    barrier = threading.Barrier(9)

    def _reader() -> None:
        local: set[bytes] = set()
        barrier.wait()
        for _ in range(2000):
            document = store.read()
            assert document is not None
            local.add(document.body)
        with seen_lock:
            seen.update(local)

    def _writer() -> None:
        barrier.wait()
        for i in range(500):
            store.publish(new if i % 2 == 0 else old)

    threads = [threading.Thread(target=_reader) for _ in range(8)]
    threads.append(threading.Thread(target=_writer))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert seen <= {old.body, new.body}
    assert store.snapshot().sequence == 501
