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
An array is a sequence of values that all have the same signature.

Layout: [padding][N: u32][element_0][padding][element_1]...

N is the number of bytes between the end of the length field and the end of the last element, padding between
elements included (the array's own leading padding and the length field are not counted). Elements are not length
prefixed: the extent of each element is recovered by slicing it with the element signature, which is why decoding
must reproduce the exact padding decisions made while encoding.

>>> from gvwire.context import ByteOrder, EncodingContext
>>> from gvwire.simple_types import Uint64
>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE)
>>> se = Serializer.build_bytes_serializer()
>>> Array.from_values([Uint64(2), Uint64(3)]).encode_into(se, ctx)
>>> encoded = bytes(se.finalize())
>>> encoded.hex()
'140000000000000002000000000000000300000000000000'

Breakdown of the result:

    14000000: N = 20, the padding before the first element is counted
    00000000: padding, a u64 must start at a multiple of 8
    0200000000000000: Uint64(2)
    0300000000000000: Uint64(3)

>>> Array.decode(SharedData(encoded), 'at', ctx).to_list(Uint64)
[Uint64(2), Uint64(3)]
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, NamedTuple, Optional, TypeVar

from typing_extensions import Self, override

from gvwire.context import EncodingContext
from gvwire.exceptions import ExcessDataError, IncorrectTypeError, InsufficientDataError, TooLongError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.simple_types import Uint32
from gvwire.variant import Variant
from gvwire.variant_type import VariantType

if TYPE_CHECKING:
    from gvwire.dict_entry import Dict

V = TypeVar('V', bound=VariantType)

_LENGTH_FIELD_SIZE = 4


class Array(VariantType):
    """ A sequence of variants of the same signature, the array owns its elements.

    The signature of an array is taken from its first element. An array built in memory without elements has no
    signature unless `element_signature` is given, such an array can only be encoded where the signature is known from
    elsewhere. Elements are not checked to all have the same signature, keeping that is up to the caller.
    """

    __slots__ = ('_elements', '_element_signature')

    SIGNATURE_CHAR = 'a'
    SIGNATURE_STR = 'a'
    ALIGNMENT = 4

    _elements: list[Variant]
    _element_signature: Optional[str]

    def __init__(
        self,
        elements: Optional[Iterable[Variant]] = None,
        *,
        element_signature: Optional[str] = None,
    ) -> None:
        self._elements = [] if elements is None else list(elements)
        self._element_signature = element_signature

    @classmethod
    def from_values(cls, values: Iterable[VariantType], *, element_signature: Optional[str] = None) -> Self:
        """ Build an array wrapping each value in a Variant.
        """
        return cls([value.to_variant() for value in values], element_signature=element_signature)

    @classmethod
    def from_dict(cls, value: Dict) -> Self:
        """ Build an array holding the entries of a dict, in order.
        """
        return cls.from_values(value.take_inner(), element_signature=value.entry_signature())

    def inner(self) -> list[Variant]:
        return self._elements

    def inner_mut(self) -> list[Variant]:
        return self._elements

    def take_inner(self) -> list[Variant]:
        elements = self._elements
        self._elements = []
        return elements

    def append(self, value: Variant | VariantType) -> None:
        self._elements.append(value if isinstance(value, Variant) else value.to_variant())

    def extend(self, values: Iterable[Variant | VariantType]) -> None:
        for value in values:
            self.append(value)

    def to_list(self, type_: type[V]) -> list[V]:
        """ Unwrap every element, raising IncorrectTypeError if any of them is not of type `type_`.
        """
        return [type_.take_from_variant(element) for element in self._elements]

    def element_signature(self) -> str:
        if self._elements:
            return self._elements[0].value_signature()
        if self._element_signature is not None:
            return self._element_signature
        raise IncorrectTypeError('cannot infer the signature of an empty array')

    @override
    def signature(self) -> str:
        return self.SIGNATURE_CHAR + self.element_signature()

    @override
    def encode_into(self, serializer: Serializer, context: EncodingContext) -> None:
        self.add_padding(serializer, context)

        len_position = serializer.cur_pos()
        serializer.write_bytes(bytes(_LENGTH_FIELD_SIZE))
        n_bytes_before = serializer.cur_pos()
        child_context = context.copy_for_child()
        for element in self._elements:
            element.encode_value_into(serializer, child_context)

        length = serializer.cur_pos() - n_bytes_before
        if length > context.max_array_length:
            raise TooLongError(f'array length {length} exceeds maximum of {context.max_array_length} bytes')
        serializer.patch_bytes(len_position, Uint32.pack(length, context))

    @override
    @classmethod
    def slice_signature(cls, signature: str) -> str:
        from gvwire.signature import slice_signature
        if not signature.startswith(cls.SIGNATURE_CHAR):
            raise IncorrectTypeError(f'expected an array signature, got {signature!r}')
        # exactly one complete signature must follow 'a', anything after it is not part of this array
        child_signature = slice_signature(signature[1:])
        return signature[:len(child_signature) + 1]

    @classmethod
    def _slice_elements(cls, data: SharedData, signature: str, context: EncodingContext) -> _ArrayLayout:
        """ Walk the array at the front of `data`, slicing every element without decoding it.
        """
        from gvwire.signature import slice_data, slice_signature
        if len(signature) < 2:
            raise InsufficientDataError(f'incomplete array signature {signature!r}')
        cls.ensure_correct_signature(signature)
        child_signature = slice_signature(signature[1:])

        len_slice = Uint32.slice_data_simple(data, context)
        extracted = len(len_slice)
        length = Uint32.decode_simple(len_slice, context)
        if length > context.max_array_length:
            raise TooLongError(f'array length {length} exceeds maximum of {context.max_array_length} bytes')
        elements_start = extracted
        end = extracted + length

        child_context = context.copy_for_child()
        elements: list[SharedData] = []
        while extracted < end:
            element = slice_data(data.tail(extracted), child_signature, child_context)
            if not element:
                raise ExcessDataError('array element extracted no bytes')
            extracted += len(element)
            if extracted > end:
                raise InsufficientDataError('array element extends past the array length')
            elements.append(element)

        if extracted == elements_start and not context.allow_empty_arrays:
            raise ExcessDataError('array extracted no bytes')
        return _ArrayLayout(extracted, elements, child_signature, child_context)

    @override
    @classmethod
    def slice_data(cls, data: SharedData, signature: str, context: EncodingContext) -> SharedData:
        layout = cls._slice_elements(data, signature, context)
        return data.head(layout.size)

    @override
    @classmethod
    def decode(cls, data: SharedData, signature: str, context: EncodingContext) -> Self:
        layout = cls._slice_elements(data, signature, context)
        elements = [
            Variant.from_data(element, layout.element_signature, layout.element_context)
            for element in layout.elements
        ]
        return cls(elements, element_signature=layout.element_signature)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Variant:
        return self._elements[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._elements == other._elements

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'Array({self._elements!r})'


class _ArrayLayout(NamedTuple):
    # bytes taken by the whole array, its leading padding included
    size: int
    elements: list[SharedData]
    element_signature: str
    element_context: EncodingContext
