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
Recursive-descent parsing of signatures, and dispatch of byte-level operations by signature.

A signature is a compact text description of a type. Every scalar type is a single character, containers are
introduced by a character and followed by the signatures of their children:

- `a` followed by exactly one complete signature: an array of that type;
- `(` followed by one or more complete signatures and `)`: a structure;
- `{` followed by a basic type, a complete signature and `}`: a dict entry;
- `v`: a variant, the signature of the value is carried in the data.

`slice_signature` returns the prefix of a signature that is exactly one complete type, which is how containers
discover where the signature of a child ends:

>>> slice_signature('aai')
'aai'
>>> slice_signature('aix')
'ai'
>>> slice_signature('a{sv}as')
'a{sv}'
>>> split_signature('ua(si)v')
['u', 'a(si)', 'v']
>>> try:
...     slice_signature('a')
... except InsufficientDataError as e:
...     print(e)
empty signature
"""

from gvwire.consts import MAX_SIGNATURE_LENGTH
from gvwire.context import EncodingContext
from gvwire.exceptions import IncorrectTypeError, InsufficientDataError
from gvwire.shared_data import SharedData
from gvwire.variant_type import VariantType


def get_variant_type(signature: str) -> type[VariantType]:
    """ The type class for the type whose signature starts `signature`.
    """
    from gvwire.type_map import DEFAULT_TYPE_MAP
    if not signature:
        raise InsufficientDataError('empty signature')
    try:
        return DEFAULT_TYPE_MAP[signature[0]]
    except KeyError:
        raise IncorrectTypeError(f'unknown signature character {signature[0]!r}') from None


def slice_signature(signature: str) -> str:
    """ The shortest prefix of `signature` that is one complete type.
    """
    if len(signature) > MAX_SIGNATURE_LENGTH:
        raise IncorrectTypeError(f'signature longer than {MAX_SIGNATURE_LENGTH} characters')
    return get_variant_type(signature).slice_signature(signature)


def split_signature(signature: str) -> list[str]:
    """ Split a concatenation of complete signatures, the whole string must be consumed.
    """
    parts = []
    while signature:
        part = slice_signature(signature)
        parts.append(part)
        signature = signature[len(part):]
    return parts


def is_complete_signature(signature: str) -> bool:
    """ Whether the whole of `signature` is exactly one complete type.
    """
    try:
        return slice_signature(signature) == signature
    except (IncorrectTypeError, InsufficientDataError):
        return False


def alignment_of(signature: str) -> int:
    return get_variant_type(signature).alignment()


def slice_data(data: SharedData, signature: str, context: EncodingContext) -> SharedData:
    """ View of the bytes holding one value of type `signature` at the front of `data`, padding included.
    """
    return get_variant_type(signature).slice_data(data, signature, context)


def decode(data: SharedData, signature: str, context: EncodingContext) -> VariantType:
    return get_variant_type(signature).decode(data, signature, context)
