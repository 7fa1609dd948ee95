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
Dictionaries are arrays of dict entries, `a{sv}` is a dictionary from strings to variants.

A dict entry is laid out exactly like a structure with two fields, the key must be of a basic (non-container) type:

    [padding to 8][key][padding][value]

`Dict` is the in-memory side of a dictionary. It is converted to an `Array` to be encoded and built back from the
decoded `Array`:

>>> from gvwire.context import ByteOrder, EncodingContext
>>> from gvwire.array import Array
>>> from gvwire.simple_types import Byte
>>> from gvwire.string_types import Str
>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE)
>>> d = Dict.from_mapping({Str('a'): Byte(1), Str('b'): Byte(2)})
>>> array = Array.from_dict(d)
>>> array.signature()
'a{sy}'
>>> encoded = array.to_bytes(ctx)
>>> encoded.hex()
'1300000000000000010000006100010001000000620002'
>>> decoded = Array.from_bytes(encoded, 'a{sy}', ctx)
>>> Dict.from_array(decoded).to_mapping() == {Str('a'): Byte(1).to_variant(), Str('b'): Byte(2).to_variant()}
True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Optional

from typing_extensions import Self, override

from gvwire.consts import BASIC_SIGNATURE_CHARS, DICT_ENTRY_CLOSE, DICT_ENTRY_OPEN
from gvwire.exceptions import IncorrectTypeError, InsufficientDataError
from gvwire.structure import StructLike, wrap_variant
from gvwire.variant import Variant
from gvwire.variant_type import VariantType

if TYPE_CHECKING:
    from gvwire.array import Array


class DictEntry(StructLike):
    __slots__ = ()

    SIGNATURE_CHAR = DICT_ENTRY_OPEN
    SIGNATURE_STR = DICT_ENTRY_OPEN
    CLOSE_CHAR = DICT_ENTRY_CLOSE
    ALIGNMENT = 8

    def __init__(self, key: Variant | VariantType, value: Variant | VariantType) -> None:
        key_variant = wrap_variant(key)
        if key_variant.kind not in BASIC_SIGNATURE_CHARS:
            raise TypeError(f'dict entry key must be of a basic type, got {key_variant.value_signature()!r}')
        self._fields = [key_variant, wrap_variant(value)]

    @property
    def key(self) -> Variant:
        return self._fields[0]

    @property
    def value(self) -> Variant:
        return self._fields[1]

    @override
    @classmethod
    def slice_signature(cls, signature: str) -> str:
        from gvwire.signature import slice_signature
        if not signature.startswith(DICT_ENTRY_OPEN):
            raise IncorrectTypeError(f'expected a dict entry signature, got {signature!r}')
        key_signature = slice_signature(signature[1:])
        if key_signature[0] not in BASIC_SIGNATURE_CHARS:
            raise IncorrectTypeError(f'dict entry key must be of a basic type, got {key_signature!r}')
        pos = 1 + len(key_signature)
        pos += len(slice_signature(signature[pos:]))
        if pos >= len(signature):
            raise InsufficientDataError(f'unterminated dict entry signature {signature!r}')
        if signature[pos] != DICT_ENTRY_CLOSE:
            raise IncorrectTypeError(f'a dict entry must have exactly two fields, got {signature!r}')
        return signature[:pos + 1]


class Dict:
    """ An ordered collection of dict entries, all with the same key and value signatures.

    Like arrays, the signature comes from the first entry, an empty `Dict` needs `key_signature` and
    `value_signature` to be converted to an array with a known signature.
    """

    __slots__ = ('_entries', '_key_signature', '_value_signature')

    def __init__(
        self,
        entries: Optional[Iterable[DictEntry]] = None,
        *,
        key_signature: Optional[str] = None,
        value_signature: Optional[str] = None,
    ) -> None:
        self._entries = [] if entries is None else list(entries)
        self._key_signature = key_signature
        self._value_signature = value_signature

    @classmethod
    def from_mapping(cls, mapping: Mapping[VariantType, Variant | VariantType]) -> Self:
        return cls(DictEntry(key, value) for key, value in mapping.items())

    @classmethod
    def from_array(cls, array: Array) -> Self:
        """ Build a dict from an array of dict entries, IncorrectTypeError if any element is not a dict entry.
        """
        return cls(array.to_list(DictEntry))

    def add(self, key: Variant | VariantType, value: Variant | VariantType) -> None:
        self._entries.append(DictEntry(key, value))

    def inner(self) -> list[DictEntry]:
        return self._entries

    def take_inner(self) -> list[DictEntry]:
        entries = self._entries
        self._entries = []
        return entries

    def entry_signature(self) -> Optional[str]:
        """ Signature of the entries, `None` when it can't be known.
        """
        if self._entries:
            return self._entries[0].signature()
        if self._key_signature is not None and self._value_signature is not None:
            return DICT_ENTRY_OPEN + self._key_signature + self._value_signature + DICT_ENTRY_CLOSE
        return None

    def to_mapping(self) -> dict[VariantType, Variant]:
        """ Plain dict with the unwrapped keys, on duplicate keys the last entry wins.
        """
        return {entry.key.inner: entry.value for entry in self._entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dict):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'Dict({self._entries!r})'
