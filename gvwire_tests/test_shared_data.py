import pytest

from gvwire.exceptions import InsufficientDataError
from gvwire.shared_data import SharedData


def test_head_tail_subset_positions() -> None:
    data = SharedData(bytes(range(10)))
    assert len(data) == 10
    assert data.position() == 0

    tail = data.tail(3)
    assert tail.position() == 3
    assert tail.to_bytes() == bytes(range(3, 10))

    head = tail.head(4)
    assert head.position() == 3
    assert head.to_bytes() == bytes([3, 4, 5, 6])

    sub = tail.subset(2, 5)
    assert sub.position() == 5
    assert bytes(sub) == bytes([5, 6, 7])
    assert sub.tail(3).is_empty()


def test_base_position() -> None:
    data = SharedData(b'\x01\x02\x03', position=13)
    assert data.position() == 13
    assert data.tail(2).position() == 15


def test_views_do_not_copy() -> None:
    buffer = bytearray(b'\x00\x00\x00\x00')
    view = SharedData(buffer).tail(2)
    buffer[3] = 0xff
    assert view.to_bytes() == b'\x00\xff'


@pytest.mark.parametrize('op', [
    lambda d: d.head(5),
    lambda d: d.tail(5),
    lambda d: d.subset(2, 5),
    lambda d: d.tail(4).head(1),
])
def test_out_of_range(op) -> None:
    data = SharedData(b'\x00\x01\x02\x03')
    with pytest.raises(InsufficientDataError):
        op(data)


def test_negative_values() -> None:
    data = SharedData(b'\x00\x01')
    with pytest.raises(ValueError):
        data.head(-1)
    with pytest.raises(ValueError):
        data.subset(1, 0)
    with pytest.raises(ValueError):
        SharedData(b'', position=-1)


def test_equality_and_indexing() -> None:
    data = SharedData(b'abcdef')
    assert data.subset(1, 3) == b'bc'
    assert data.subset(1, 3) == SharedData(b'xbc').tail(1)
    assert data[0] == ord('a')
    assert data.tail(5)[0] == ord('f')
    with pytest.raises(InsufficientDataError):
        data.tail(6)[0]
