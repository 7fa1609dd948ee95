import struct
from typing import Optional

import pytest

from gvwire.array import Array
from gvwire.context import ByteOrder, EncodingContext
from gvwire.dict_entry import Dict, DictEntry
from gvwire.exceptions import ExcessDataError, IncorrectTypeError, InsufficientDataError, TooLongError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.simple_types import Byte, Int16, Int32, Uint16, Uint32, Uint64, _SizedInt
from gvwire.string_types import Str
from gvwire.variant import Variant
from gvwire_tests import unittest

LITTLE = EncodingContext(byte_order=ByteOrder.LITTLE)
NATIVE = EncodingContext(byte_order=ByteOrder.NATIVE)


def test_array_of_u32() -> None:
    array = Array.from_values([Uint32(1), Uint32(2), Uint32(3)])
    assert array.signature() == 'au'
    data = array.to_bytes(NATIVE)
    assert data == struct.pack('=IIII', 12, 1, 2, 3)

    decoded = Array.decode(SharedData(data), 'au', NATIVE)
    assert decoded.to_list(Uint32) == [Uint32(1), Uint32(2), Uint32(3)]
    assert [int(v) for v in decoded.to_list(Uint32)] == [1, 2, 3]


def test_array_of_arrays() -> None:
    inner = [Array.from_values([Uint32(7)]) for _ in range(2)]
    array = Array.from_values(inner)
    assert array.signature() == 'aau'
    data = array.to_bytes(LITTLE)
    # every inner array is its 4 bytes length plus one u32, all aligned to 4 already
    outer_length, = struct.unpack_from('<I', data)
    assert outer_length == 2 * (4 + 4) == len(data) - 4
    assert data == struct.pack('<5I', 16, 4, 7, 4, 7)

    decoded = Array.decode(SharedData(data), 'aau', LITTLE)
    assert decoded == array
    assert [a.to_list(Uint32) for a in decoded.to_list(Array)] == [[Uint32(7)]] * 2


def test_array_of_arrays_with_padding() -> None:
    inner = [Array.from_values([Byte(7)]) for _ in range(2)]
    data = Array.from_values(inner).to_bytes(LITTLE)
    assert data == bytes.fromhex(
        '0d000000'  # outer length: 13
        '0100000007'  # first inner array
        '000000'  # padding, the next inner array must start at a multiple of 4
        '0100000007'  # second inner array
    )


def test_length_counts_padding_before_first_element() -> None:
    data = Array.from_values([Uint64(1)]).to_bytes(LITTLE)
    assert data == bytes.fromhex('0c000000' '00000000' '0100000000000000')
    assert Array.decode(SharedData(data), 'at', LITTLE).to_list(Uint64) == [Uint64(1)]


def test_leading_padding_of_the_array() -> None:
    se = Serializer.build_bytes_serializer()
    Byte(0xaa).encode_into(se, LITTLE)
    Array.from_values([Uint16(1), Uint16(2)]).encode_into(se, LITTLE)
    data = bytes(se.finalize())
    assert data == bytes.fromhex('aa' '000000' '04000000' '0100' '0200')

    view = SharedData(data).tail(1)
    extent = Array.slice_data(view, 'aq', LITTLE)
    # the extent includes the leading padding of the array
    assert extent.position() == 1
    assert len(extent) == 3 + 4 + 4
    assert Array.decode(view, 'aq', LITTLE).to_list(Uint16) == [Uint16(1), Uint16(2)]


def test_slice_ignores_trailing_data() -> None:
    data = Array.from_values([Int32(-1), Int32(5)]).to_bytes(LITTLE)
    extent = Array.slice_data(SharedData(data + b'\xff' * 7), 'ai', LITTLE)
    assert extent.to_bytes() == data


def test_truncation_is_insufficient_data() -> None:
    array = Array.from_values([Str('foo'), Str(''), Str('barbaz')])
    data = array.to_bytes(LITTLE)
    for n in range(1, len(data) + 1):
        truncated = SharedData(data[:-n])
        with pytest.raises(InsufficientDataError):
            Array.slice_data(truncated, 'as', LITTLE)
        with pytest.raises(InsufficientDataError):
            Array.decode(truncated, 'as', LITTLE)


def test_element_overrunning_the_length() -> None:
    # declared length of 6 but the second u32 ends at 8
    data = struct.pack('<III', 6, 1, 2)
    with pytest.raises(InsufficientDataError):
        Array.decode(SharedData(data), 'au', LITTLE)
    with pytest.raises(InsufficientDataError):
        Array.slice_data(SharedData(data), 'au', LITTLE)


def test_zero_extraction_is_excess_data() -> None:
    data = struct.pack('<I', 0)
    with pytest.raises(ExcessDataError):
        Array.decode(SharedData(data), 'au', LITTLE)
    with pytest.raises(ExcessDataError):
        Array.slice_data(SharedData(data), 'au', LITTLE)
    # also when there are unrelated bytes after the length field
    with pytest.raises(ExcessDataError):
        Array.decode(SharedData(data + b'\x01\x00\x00\x00'), 'au', LITTLE)


def test_empty_arrays_when_allowed() -> None:
    ctx = EncodingContext(byte_order=ByteOrder.LITTLE, allow_empty_arrays=True)
    data = struct.pack('<I', 0)
    decoded = Array.decode(SharedData(data), 'as', ctx)
    assert len(decoded) == 0
    assert decoded.signature() == 'as'
    assert decoded.to_bytes(ctx) == data
    assert len(Array.slice_data(SharedData(data), 'as', ctx)) == 4


def test_signature_errors() -> None:
    data = SharedData(struct.pack('<II', 4, 1))
    with pytest.raises(InsufficientDataError):
        Array.decode(data, 'a', LITTLE)
    with pytest.raises(InsufficientDataError):
        Array.slice_data(data, 'a', LITTLE)
    with pytest.raises(IncorrectTypeError):
        Array.decode(data, 'au u', LITTLE)
    with pytest.raises(IncorrectTypeError):
        Array.decode(data, 'aux', LITTLE)
    with pytest.raises(IncorrectTypeError):
        Array.decode(data, 'su', LITTLE)
    with pytest.raises(IncorrectTypeError):
        Array.decode(data, 'az', LITTLE)


def test_signature_inferred_from_first_element() -> None:
    assert Array.from_values([Str('a')]).signature() == 'as'
    assert Array.from_values([Array.from_values([Byte(1)])]).signature() == 'aay'
    # not checked: the first element wins
    assert Array.from_values([Byte(1), Str('a')]).signature() == 'ay'

    with pytest.raises(IncorrectTypeError):
        Array().signature()
    assert Array(element_signature='s').signature() == 'as'
    # the first element wins over the given signature
    assert Array.from_values([Byte(1)], element_signature='s').signature() == 'ay'


def test_to_list_type_mismatch() -> None:
    array = Array.from_values([Uint32(1), Uint32(2)])
    assert array.to_list(Uint32) == [Uint32(1), Uint32(2)]
    with pytest.raises(IncorrectTypeError):
        array.to_list(Int32)
    with pytest.raises(IncorrectTypeError):
        Array.from_values([Uint32(1), Int32(2)]).to_list(Uint32)


def test_owner_methods() -> None:
    array = Array()
    array.append(Int16(1))
    array.append(Variant(Int16(2)))
    array.extend([Int16(3), Variant(Int16(4))])
    array.inner_mut().append(Variant(Int16(5)))
    assert array.to_list(Int16) == [Int16(i) for i in range(1, 6)]
    assert array[0] == Variant(Int16(1))
    assert len(array) == 5

    elements = array.take_inner()
    assert len(elements) == 5
    assert len(array) == 0


def test_array_owns_its_elements() -> None:
    elements = [Variant(Uint32(1))]
    array = Array(elements)
    elements.append(Variant(Uint32(2)))
    elements.clear()
    assert len(array) == 1
    assert array.to_list(Uint32) == [Uint32(1)]

    # also for generators
    array = Array(Variant(Uint32(i)) for i in range(3))
    assert array.to_list(Uint32) == [Uint32(0), Uint32(1), Uint32(2)]


def test_from_dict() -> None:
    d = Dict()
    d.add(Str('one'), Uint32(1))
    d.add(Str('two'), Uint32(2))
    array = Array.from_dict(d)
    assert array.signature() == 'a{su}'
    assert array.to_list(DictEntry) == [DictEntry(Str('one'), Uint32(1)), DictEntry(Str('two'), Uint32(2))]

    empty = Array.from_dict(Dict(key_signature='s', value_signature='u'))
    assert empty.signature() == 'a{su}'


def test_max_array_length() -> None:
    ctx = EncodingContext(byte_order=ByteOrder.LITTLE, max_array_length=8)
    Array.from_values([Uint32(1), Uint32(2)]).to_bytes(ctx)
    with pytest.raises(TooLongError):
        Array.from_values([Uint32(1), Uint32(2), Uint32(3)]).to_bytes(ctx)
    with pytest.raises(TooLongError):
        Array.decode(SharedData(struct.pack('<IIII', 12, 1, 2, 3)), 'au', ctx)


class ArrayTestCase(unittest.TestCase):
    def _random_array(self, depth: int, type_: Optional[type[_SizedInt]] = None) -> Array:
        # every leaf array uses the same element type so that all siblings share a signature
        if type_ is None:
            type_ = self.rng.choice([Byte, Int16, Uint32, Uint64])
        size = self.rng.randint(1, 5)
        if depth == 0:
            return Array.from_values(
                type_(self.rng.randint(type_.lower_bound_value(), type_.upper_bound_value()))
                for _ in range(size)
            )
        return Array.from_values(self._random_array(depth - 1, type_) for _ in range(size))

    def test_round_trip(self) -> None:
        for _ in range(50):
            array = self._random_array(self.rng.randint(0, 3))
            for byte_order in ByteOrder:
                self.assertRoundTrip(array, self.context(byte_order))

    def test_round_trip_at_every_offset(self) -> None:
        array = Array.from_values([
            Array.from_values([Byte(1), Byte(2), Byte(3)]),
            Array.from_values([Byte(4)]),
        ])
        for offset in range(16):
            se = Serializer.build_bytes_serializer()
            for i in range(offset):
                Byte(i).encode_into(se, self.context())
            array.encode_into(se, self.context())
            view = SharedData(bytes(se.finalize())).tail(offset)
            extent = Array.slice_data(view, 'aay', self.context())
            self.assertEqual(len(extent), len(view))
            self.assertEqual(Array.decode(view, 'aay', self.context()), array)

    def test_elements_are_aligned(self) -> None:
        array = Array.from_values([
            Array.from_values([Uint64(self.rng.randrange(2**64)) for _ in range(self.rng.randint(1, 4))])
            for _ in range(5)
        ])
        data = SharedData(self.encode(array))
        outer = Array._slice_elements(data, 'aat', self.context())
        for element in outer.elements:
            # element views start where the element padding starts, the value itself is aligned
            inner = Array._slice_elements(element, 'at', self.context())
            for value in inner.elements:
                start = value.position() + Uint64.padding(value.position(), self.context())
                self.assertEqual(start % 8, 0)
                self.assertEqual(len(value) - (start - value.position()), 8)

    def test_extent_agrees_with_decode(self) -> None:
        for _ in range(20):
            array = self._random_array(2)
            data = self.encode(array)
            trailing = bytes(self.rng.randrange(256) for _ in range(self.rng.randint(0, 8)))
            view = SharedData(data + trailing)
            self.assertEqual(len(Array.slice_data(view, array.signature(), self.context())), len(data))
            self.assertEqual(Array.decode(view, array.signature(), self.context()), array)
