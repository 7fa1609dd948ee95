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

from __future__ import annotations

from typing import TypeVar

from gvwire.context import EncodingContext
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.variant_type import VariantType

V = TypeVar('V', bound=VariantType)


class Variant:
    """ A fully decoded value of any type of the type algebra.

    This is a tagged union: the tag is the signature character of the held value (`kind`) and the payload is the
    `VariantType` instance, which the variant owns. Containers store their children as variants so they can encode,
    slice and decode them without knowing their concrete type.
    """

    __slots__ = ('_inner',)

    _inner: VariantType

    def __init__(self, inner: VariantType) -> None:
        if isinstance(inner, Variant):
            raise TypeError('a Variant cannot hold another Variant directly, use Boxed')
        if not isinstance(inner, VariantType):
            raise TypeError(f'expected a VariantType, got {type(inner).__name__}')
        self._inner = inner

    @classmethod
    def from_data(cls, data: SharedData, signature: str, context: EncodingContext) -> Variant:
        """ Decode the value of type `signature` at the front of `data`.
        """
        from gvwire.signature import decode
        return cls(decode(data, signature, context))

    @property
    def inner(self) -> VariantType:
        return self._inner

    @property
    def kind(self) -> str:
        """ The signature character of the held value.
        """
        return self._inner.SIGNATURE_CHAR

    def value_signature(self) -> str:
        return self._inner.signature()

    def encode_value_into(self, serializer: Serializer, context: EncodingContext) -> None:
        self._inner.encode_into(serializer, context)

    def get(self, type_: type[V]) -> V:
        """ The held value, raising IncorrectTypeError if it is not of type `type_`.
        """
        return type_.from_variant(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variant):
            return NotImplemented
        return self._inner == other._inner

    def __hash__(self) -> int:
        return hash(self._inner)

    def __repr__(self) -> str:
        return f'Variant({self._inner!r})'
