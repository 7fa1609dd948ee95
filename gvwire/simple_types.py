# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
Fixed-size scalar types, the alignment of each type is its size.

A fixed-size value is encoded as padding followed by the value in the byte order of the context:

>>> from gvwire.context import ByteOrder, EncodingContext
>>> ctx = EncodingContext(byte_order=ByteOrder.BIG)
>>> se = Serializer.build_bytes_serializer()
>>> Byte(0xff).encode_into(se, ctx)
>>> Uint32(1234).encode_into(se, ctx)
>>> Int16(-2).encode_into(se, ctx)
>>> bytes(se.finalize()).hex()
'ff000000000004d2fffe'

Breakdown of the result:

    ff: Byte(255)
    000000: padding, the next value must start at a multiple of 4
    000004d2: Uint32(1234)
    fffe: Int16(-2), already at a multiple of 2

>>> data = SharedData(bytes.fromhex('ff000000000004d2fffe'))
>>> Uint32.slice_data(data.tail(1), 'u', ctx).to_bytes().hex()
'000000000004d2'
>>> Uint32.decode(data.tail(1), 'u', ctx)
Uint32(1234)
"""

from __future__ import annotations

import struct
from abc import abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from typing_extensions import Self, override

from gvwire.context import EncodingContext
from gvwire.exceptions import BadDataError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.variant_type import VariantType

T = TypeVar('T')


class SimpleVariantType(VariantType, Generic[T]):
    """ Base class for types with a fixed encoded size that `struct` can pack.
    """

    __slots__ = ('_value',)

    # XXX: subclass must define this value, without a byte order character:
    STRUCT_FORMAT: ClassVar[str]

    _value: T

    def __init__(self, value: T) -> None:
        self._value = self._check_value(value)

    @property
    def value(self) -> T:
        return self._value

    @classmethod
    def size(cls) -> int:
        return struct.calcsize('=' + cls.STRUCT_FORMAT)

    @classmethod
    @abstractmethod
    def _check_value(cls, value: Any) -> T:
        """ Validate (and possibly normalize) a value, raising TypeError or ValueError when it can't be encoded.
        """
        raise NotImplementedError

    @classmethod
    def _to_raw(cls, value: T) -> Any:
        return value

    @classmethod
    def _from_raw(cls, raw: Any) -> T:
        return raw

    @classmethod
    def pack(cls, value: T, context: EncodingContext) -> bytes:
        """ The bytes of `value` without any padding.
        """
        return struct.pack(context.struct_format(cls.STRUCT_FORMAT), cls._to_raw(cls._check_value(value)))

    @classmethod
    def slice_data_simple(cls, data: SharedData, context: EncodingContext) -> SharedData:
        """ Extent of a value of this type at the front of `data`, no signature needed.
        """
        return data.head(cls.padding(data.position(), context) + cls.size())

    @classmethod
    def decode_simple(cls, data: SharedData, context: EncodingContext) -> T:
        """ Decode the plain python value at the front of `data`, no signature needed.
        """
        padding = cls.padding(data.position(), context)
        raw_bytes = data.subset(padding, padding + cls.size())
        raw, = struct.unpack(context.struct_format(cls.STRUCT_FORMAT), raw_bytes.memoryview())
        return cls._from_raw(raw)

    @override
    def encode_into(self, serializer: Serializer, context: EncodingContext) -> None:
        self.add_padding(serializer, context)
        serializer.write_struct(context.struct_format(self.STRUCT_FORMAT), self._to_raw(self._value))

    @override
    @classmethod
    def slice_data(cls, data: SharedData, signature: str, context: EncodingContext) -> SharedData:
        cls.ensure_correct_signature(signature)
        return cls.slice_data_simple(data, context)

    @override
    @classmethod
    def decode(cls, data: SharedData, signature: str, context: EncodingContext) -> Self:
        cls.ensure_correct_signature(signature)
        return cls(cls.decode_simple(data, context))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, SimpleVariantType)
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self.SIGNATURE_CHAR, self._value))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._value!r})'


class _SizedInt(SimpleVariantType[int]):
    """ Base class for integers with a fixed size and signedness.
    """

    __slots__ = ()

    # XXX: subclass must define this value:
    _signed: ClassVar[bool]

    @classmethod
    def upper_bound_value(cls) -> int:
        bits = cls.size() * 8
        return 2**(bits - 1) - 1 if cls._signed else 2**bits - 1

    @classmethod
    def lower_bound_value(cls) -> int:
        return -(2**(cls.size() * 8 - 1)) if cls._signed else 0

    @override
    @classmethod
    def _check_value(cls, value: Any) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f'expected int, got {type(value).__name__}')
        if not cls.lower_bound_value() <= value <= cls.upper_bound_value():
            raise ValueError(f'{value} out of range for {cls.__name__}')
        return value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value


class Byte(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 'y'
    SIGNATURE_STR = 'y'
    ALIGNMENT = 1
    STRUCT_FORMAT = 'B'
    _signed = False


class Int16(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 'n'
    SIGNATURE_STR = 'n'
    ALIGNMENT = 2
    STRUCT_FORMAT = 'h'
    _signed = True


class Uint16(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 'q'
    SIGNATURE_STR = 'q'
    ALIGNMENT = 2
    STRUCT_FORMAT = 'H'
    _signed = False


class Int32(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 'i'
    SIGNATURE_STR = 'i'
    ALIGNMENT = 4
    STRUCT_FORMAT = 'i'
    _signed = True


class Uint32(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 'u'
    SIGNATURE_STR = 'u'
    ALIGNMENT = 4
    STRUCT_FORMAT = 'I'
    _signed = False


class Int64(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 'x'
    SIGNATURE_STR = 'x'
    ALIGNMENT = 8
    STRUCT_FORMAT = 'q'
    _signed = True


class Uint64(_SizedInt):
    __slots__ = ()
    SIGNATURE_CHAR = 't'
    SIGNATURE_STR = 't'
    ALIGNMENT = 8
    STRUCT_FORMAT = 'Q'
    _signed = False


class Double(SimpleVariantType[float]):
    __slots__ = ()
    SIGNATURE_CHAR = 'd'
    SIGNATURE_STR = 'd'
    ALIGNMENT = 8
    STRUCT_FORMAT = 'd'

    @override
    @classmethod
    def _check_value(cls, value: Any) -> float:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise TypeError(f'expected float, got {type(value).__name__}')
        return float(value)

    def __float__(self) -> float:
        return self._value


class Bool(SimpleVariantType[bool]):
    """ A boolean is encoded as a 4-byte unsigned integer that can only be 0 or 1.
    """

    __slots__ = ()
    SIGNATURE_CHAR = 'b'
    SIGNATURE_STR = 'b'
    ALIGNMENT = 4
    STRUCT_FORMAT = 'I'

    @override
    @classmethod
    def _check_value(cls, value: Any) -> bool:
        if not isinstance(value, bool):
            raise TypeError(f'expected bool, got {type(value).__name__}')
        return value

    @override
    @classmethod
    def _to_raw(cls, value: bool) -> int:
        return 1 if value else 0

    @override
    @classmethod
    def _from_raw(cls, raw: int) -> bool:
        if raw == 0:
            return False
        elif raw == 1:
            return True
        else:
            raise BadDataError(f'{raw} is not a valid boolean')

    def __bool__(self) -> bool:
        return self._value
