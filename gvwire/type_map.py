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

"""
The closed set of types of the type algebra, by signature character.

Signature dispatch (see `gvwire.signature`) only knows about the types listed here.
"""

from gvwire.array import Array
from gvwire.boxed import Boxed
from gvwire.dict_entry import DictEntry
from gvwire.simple_types import Bool, Byte, Double, Int16, Int32, Int64, Uint16, Uint32, Uint64
from gvwire.string_types import ObjectPath, Signature, Str
from gvwire.structure import Structure
from gvwire.variant_type import VariantType

_ALL_TYPES: tuple[type[VariantType], ...] = (
    Byte,
    Bool,
    Int16,
    Uint16,
    Int32,
    Uint32,
    Int64,
    Uint64,
    Double,
    Str,
    ObjectPath,
    Signature,
    Array,
    Structure,
    DictEntry,
    Boxed,
)

DEFAULT_TYPE_MAP: dict[str, type[VariantType]] = {type_.SIGNATURE_CHAR: type_ for type_ in _ALL_TYPES}
