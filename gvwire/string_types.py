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
String-like types: a length prefix, the text and a terminating NUL byte that is not counted in the length.

Layout of `s` (string) and `o` (object path), aligned to 4:

    [padding][N: u32][N bytes of utf-8][0x00]

Layout of `g` (signature), aligned to 1:

    [N: u8][N bytes of ascii][0x00]

>>> from gvwire.context import ByteOrder, EncodingContext
>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE)
>>> se = Serializer.build_bytes_serializer()
>>> Signature('as').encode_into(se, ctx)
>>> Str('π').encode_into(se, ctx)
>>> bytes(se.finalize()).hex()
'0261730002000000cf8000'

Breakdown of the result:

    02617300: Signature('as'), length 2, 'as' and the NUL
    02000000: length of the string, position 4 is already aligned so there is no padding
    cf80: 'π' in utf-8
    00: NUL

>>> data = SharedData(bytes.fromhex('0261730002000000cf8000'))
>>> Str.decode(data.tail(4), 's', ctx)
Str('π')
>>> len(Str.slice_data(data.tail(4), 's', ctx))
7
"""

from __future__ import annotations

import re
from typing import ClassVar

from typing_extensions import Self, override

from gvwire.consts import MAX_SIGNATURE_LENGTH
from gvwire.context import EncodingContext
from gvwire.exceptions import BadDataError, IncorrectTypeError, InsufficientDataError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.simple_types import Byte, SimpleVariantType, Uint32
from gvwire.variant_type import VariantType

_OBJECT_PATH_RE = re.compile(r'/|(/[A-Za-z0-9_]+)+')


class _StringLike(VariantType):
    """ Base class for NUL terminated, length prefixed text.
    """

    __slots__ = ('_value',)

    # XXX: subclass must define these values:
    _LENGTH_TYPE: ClassVar[type[SimpleVariantType[int]]]
    _ENCODING: ClassVar[str]

    _value: str

    def __init__(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f'expected str, got {type(value).__name__}')
        if '\0' in value:
            raise ValueError('text cannot contain NUL characters')
        self._check_text(value)
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    @classmethod
    def _check_text(cls, value: str) -> None:
        """ Raise ValueError if the text is not valid for this type.
        """
        pass

    @override
    def encode_into(self, serializer: Serializer, context: EncodingContext) -> None:
        self.add_padding(serializer, context)
        data = self._value.encode(self._ENCODING)
        serializer.write_bytes(self._LENGTH_TYPE.pack(len(data), context))
        serializer.write_bytes(data)
        serializer.write_byte(0)

    @override
    @classmethod
    def slice_data(cls, data: SharedData, signature: str, context: EncodingContext) -> SharedData:
        cls.ensure_correct_signature(signature)
        len_slice = cls._LENGTH_TYPE.slice_data_simple(data, context)
        length = cls._LENGTH_TYPE.decode_simple(len_slice, context)
        return data.head(len(len_slice) + length + 1)

    @override
    @classmethod
    def decode(cls, data: SharedData, signature: str, context: EncodingContext) -> Self:
        extent = cls.slice_data(data, signature, context)
        text_start = len(cls._LENGTH_TYPE.slice_data_simple(data, context))
        raw = extent.subset(text_start, len(extent) - 1).to_bytes()
        if extent[len(extent) - 1] != 0:
            raise BadDataError('text is not NUL terminated')
        if b'\0' in raw:
            raise BadDataError('text contains a NUL byte')
        try:
            text = raw.decode(cls._ENCODING)
        except UnicodeDecodeError as e:
            raise BadDataError(f'invalid {cls._ENCODING} text') from e
        try:
            return cls(text)
        except ValueError as e:
            raise BadDataError(str(e)) from e

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, _StringLike)
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self.SIGNATURE_CHAR, self._value))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._value!r})'


class Str(_StringLike):
    __slots__ = ()
    SIGNATURE_CHAR = 's'
    SIGNATURE_STR = 's'
    ALIGNMENT = 4
    _LENGTH_TYPE = Uint32
    _ENCODING = 'utf-8'


class ObjectPath(_StringLike):
    """ A `/` separated path, each element made only of `[A-Za-z0-9_]`.
    """

    __slots__ = ()
    SIGNATURE_CHAR = 'o'
    SIGNATURE_STR = 'o'
    ALIGNMENT = 4
    _LENGTH_TYPE = Uint32
    _ENCODING = 'utf-8'

    @override
    @classmethod
    def _check_text(cls, value: str) -> None:
        if not _OBJECT_PATH_RE.fullmatch(value):
            raise ValueError(f'invalid object path {value!r}')


class Signature(_StringLike):
    """ A signature value, which is a concatenation of zero or more complete signatures.
    """

    __slots__ = ()
    SIGNATURE_CHAR = 'g'
    SIGNATURE_STR = 'g'
    ALIGNMENT = 1
    _LENGTH_TYPE = Byte
    _ENCODING = 'ascii'

    @override
    @classmethod
    def _check_text(cls, value: str) -> None:
        from gvwire.signature import split_signature
        if len(value) > MAX_SIGNATURE_LENGTH:
            raise ValueError(f'signature longer than {MAX_SIGNATURE_LENGTH} characters')
        try:
            split_signature(value)
        except (IncorrectTypeError, InsufficientDataError) as e:
            raise ValueError(f'invalid signature {value!r}: {e}') from e

    def split(self) -> list[str]:
        """ The complete signatures this value is made of.
        """
        from gvwire.signature import split_signature
        return split_signature(self._value)
