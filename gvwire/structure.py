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
A structure is a fixed sequence of values of possibly different types.

Layout: [padding to 8][field_0][padding][field_1]...

There is no length and no count in the data, the fields are found by slicing each one with its own signature, taken
in order from the structure signature.

>>> from gvwire.context import ByteOrder, EncodingContext
>>> from gvwire.simple_types import Byte, Uint32
>>> from gvwire.string_types import Str
>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE)
>>> value = Structure([Byte(7), Uint32(1), Str('hi')])
>>> value.signature()
'(yus)'
>>> value.to_bytes(ctx).hex()
'070000000100000002000000686900'

Breakdown of the result:

    07: Byte(7)
    000000: padding, a u32 must start at a multiple of 4
    01000000: Uint32(1)
    02000000686900: Str('hi') with length prefix and NUL
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import ClassVar

from typing_extensions import Self, override

from gvwire.consts import STRUCT_CLOSE, STRUCT_OPEN
from gvwire.context import EncodingContext
from gvwire.exceptions import IncorrectTypeError, InsufficientDataError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.variant import Variant
from gvwire.variant_type import VariantType


class StructLike(VariantType):
    """ Base class for containers with a fixed list of fields, each encoded after the other.
    """

    __slots__ = ('_fields',)

    # XXX: subclass must define this value:
    CLOSE_CHAR: ClassVar[str]

    _fields: list[Variant]

    @classmethod
    def _from_fields(cls, fields: list[Variant]) -> Self:
        """ Build an instance from already wrapped fields, used when decoding.
        """
        new = cls.__new__(cls)
        new._fields = fields
        return new

    @classmethod
    def child_signatures(cls, signature: str) -> list[str]:
        """ The signatures of the fields, `signature` must be exactly one complete signature of this type.
        """
        from gvwire.signature import split_signature
        return split_signature(signature[1:-1])

    def fields(self) -> list[Variant]:
        return self._fields

    @override
    def signature(self) -> str:
        return self.SIGNATURE_CHAR + ''.join(field.value_signature() for field in self._fields) + self.CLOSE_CHAR

    @override
    def encode_into(self, serializer: Serializer, context: EncodingContext) -> None:
        self.add_padding(serializer, context)
        child_context = context.copy_for_child()
        for field in self._fields:
            field.encode_value_into(serializer, child_context)

    @classmethod
    def _slice_fields(
        cls,
        data: SharedData,
        signature: str,
        context: EncodingContext,
    ) -> tuple[int, list[tuple[SharedData, str]], EncodingContext]:
        """ Slice every field without decoding it, also returns the size of the whole value and the child context.
        """
        from gvwire.signature import slice_data
        cls.ensure_correct_signature(signature)
        extracted = cls.padding(data.position(), context)
        child_context = context.copy_for_child()
        fields = []
        for child_signature in cls.child_signatures(signature):
            field = slice_data(data.tail(extracted), child_signature, child_context)
            extracted += len(field)
            fields.append((field, child_signature))
        return extracted, fields, child_context

    @override
    @classmethod
    def slice_data(cls, data: SharedData, signature: str, context: EncodingContext) -> SharedData:
        size, _, _ = cls._slice_fields(data, signature, context)
        return data.head(size)

    @override
    @classmethod
    def decode(cls, data: SharedData, signature: str, context: EncodingContext) -> Self:
        _, fields, child_context = cls._slice_fields(data, signature, context)
        return cls._from_fields([
            Variant.from_data(field, child_signature, child_context)
            for field, child_signature in fields
        ])

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._fields)

    def __getitem__(self, index: int) -> Variant:
        return self._fields[index]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, StructLike)
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash((self.SIGNATURE_CHAR, tuple(self._fields)))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._fields!r})'


def wrap_variant(value: Variant | VariantType) -> Variant:
    return value if isinstance(value, Variant) else value.to_variant()


class Structure(StructLike):
    __slots__ = ()

    SIGNATURE_CHAR = STRUCT_OPEN
    SIGNATURE_STR = STRUCT_OPEN
    CLOSE_CHAR = STRUCT_CLOSE
    ALIGNMENT = 8

    def __init__(self, fields: Iterable[Variant | VariantType]) -> None:
        self._fields = [wrap_variant(field) for field in fields]
        if not self._fields:
            raise ValueError('a structure must have at least one field')

    @override
    @classmethod
    def slice_signature(cls, signature: str) -> str:
        from gvwire.signature import slice_signature
        if not signature.startswith(STRUCT_OPEN):
            raise IncorrectTypeError(f'expected a structure signature, got {signature!r}')
        pos = 1
        while True:
            if pos >= len(signature):
                raise InsufficientDataError(f'unterminated structure signature {signature!r}')
            if signature[pos] == STRUCT_CLOSE:
                break
            pos += len(slice_signature(signature[pos:]))
        if pos == 1:
            raise IncorrectTypeError('a structure must have at least one field')
        return signature[:pos + 1]
