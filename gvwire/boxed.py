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
A boxed variant (`v`) carries the signature of its value in the data.

Layout: [signature of the value as a `g`][padding][value]

>>> from gvwire.context import ByteOrder, EncodingContext
>>> from gvwire.simple_types import Uint32
>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE)
>>> encoded = Boxed(Uint32(5)).to_bytes(ctx)
>>> encoded.hex()
'0175000005000000'
>>> Boxed.from_bytes(encoded, 'v', ctx).value
Variant(Uint32(5))
"""

from __future__ import annotations

from typing_extensions import Self, override

from gvwire.context import EncodingContext
from gvwire.exceptions import BadDataError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.string_types import Signature
from gvwire.variant import Variant
from gvwire.variant_type import VariantType


class Boxed(VariantType):
    __slots__ = ('_value',)

    SIGNATURE_CHAR = 'v'
    SIGNATURE_STR = 'v'
    ALIGNMENT = 1

    _value: Variant

    def __init__(self, value: Variant | VariantType) -> None:
        self._value = value if isinstance(value, Variant) else value.to_variant()

    @property
    def value(self) -> Variant:
        return self._value

    @override
    def encode_into(self, serializer: Serializer, context: EncodingContext) -> None:
        Signature(self._value.value_signature()).encode_into(serializer, context)
        self._value.encode_value_into(serializer, context.copy_for_child())

    @classmethod
    def _slice_value(cls, data: SharedData, signature: str, context: EncodingContext) -> tuple[int, SharedData, str]:
        """ Slice the boxed value, returns the size of the whole variant, the value view and the value signature.
        """
        from gvwire.signature import is_complete_signature, slice_data
        cls.ensure_correct_signature(signature)
        signature_slice = Signature.slice_data(data, Signature.SIGNATURE_STR, context)
        value_signature = Signature.decode(signature_slice, Signature.SIGNATURE_STR, context).value
        if not is_complete_signature(value_signature):
            raise BadDataError(f'variant signature must be a single complete type, got {value_signature!r}')
        value = slice_data(data.tail(len(signature_slice)), value_signature, context.copy_for_child())
        return len(signature_slice) + len(value), value, value_signature

    @override
    @classmethod
    def slice_data(cls, data: SharedData, signature: str, context: EncodingContext) -> SharedData:
        size, _, _ = cls._slice_value(data, signature, context)
        return data.head(size)

    @override
    @classmethod
    def decode(cls, data: SharedData, signature: str, context: EncodingContext) -> Self:
        _, value, value_signature = cls._slice_value(data, signature, context)
        return cls(Variant.from_data(value, value_signature, context.copy_for_child()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Boxed):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self.SIGNATURE_CHAR, self._value))

    def __repr__(self) -> str:
        return f'Boxed({self._value!r})'
