import threading
import time

import pytest

from g3device.msg_q import (
    MessageQueue,
    MessageQueueError,
    MsgQStatus,
    QueueUnblockedError,
)


def test_error_status_values_match_documented_codes():
    q = MessageQueue()
    with pytest.raises(MessageQueueError) as bad_param:
        q.send(None)
    assert bad_param.value.status == -2
    q.unblock()
    with pytest.raises(QueueUnblockedError) as unblocked:
        q.unblock()
    assert unblocked.value.status == -4


def test_messages_come_out_in_order_sent():
    q = MessageQueue()
    for msg in ["a", "b", "c"]:
        q.send(msg)
    assert [q.receive() for _ in range(3)] == ["a", "b", "c"]


def test_send_none_is_invalid_parameter():
    q = MessageQueue()
    with pytest.raises(MessageQueueError) as info:
        q.send(None)
    assert info.value.status is MsgQStatus.INVALID_PARAMETER


def test_flush_calls_dealloc_and_empties_queue():
    q = MessageQueue()
    released = []
    q.send("x", released.append)
    q.send("y")
    q.send("z", released.append)
    q.flush()
    assert len(q) == 0
    assert sorted(released) == ["x", "z"]


def test_unblock_sets_flag_and_blocks_further_use():
    q = MessageQueue()
    assert q.unblocked is False
    q.unblock()
    assert q.unblocked is True
    with pytest.raises(QueueUnblockedError):
        q.send("m")
    with pytest.raises(QueueUnblockedError):
        q.receive()


def test_unblock_twice_raises():
    q = MessageQueue()
    q.unblock()
    with pytest.raises(QueueUnblockedError) as info:
        q.unblock()
    assert info.value.status is MsgQStatus.UNAVAILABLE_RESOURCE


def test_receive_waits_for_message_from_other_thread():
    q = MessageQueue()

    def producer():
        time.sleep(0.05)
        q.send("hello")

    worker = threading.Thread(target=producer)
    worker.start()
    received = q.receive()
    worker.join(timeout=5)
    assert received == "hello"
    assert len(q) == 0


def test_unblock_wakes_waiting_receiver():
    q = MessageQueue()

    def unblocker():
        time.sleep(0.05)
        q.unblock()

    worker = threading.Thread(target=unblocker)
    worker.start()
    with pytest.raises(QueueUnblockedError):
        q.receive()
    worker.join(timeout=5)
    assert q.unblocked is True


def test_many_producers_deliver_every_message():
    q = MessageQueue()
    items = list(range(100))

    def producer(chunk):
        for item in chunk:
            q.send(item)

    threads = [threading.Thread(target=producer, args=(items[i::4],)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)
    received = [q.receive() for _ in items]
    assert sorted(received) == items