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
Marshaling of values in a signature-driven, alignment-respecting binary format in the style of GVariant/D-Bus.
"""

from gvwire.array import Array
from gvwire.boxed import Boxed
from gvwire.codec import from_bytes, slice_bytes, to_bytes
from gvwire.context import ByteOrder, EncodingContext
from gvwire.dict_entry import Dict, DictEntry
from gvwire.exceptions import (
    BadDataError,
    ExcessDataError,
    IncorrectTypeError,
    InsufficientDataError,
    MaxDepthExceededError,
    TooLongError,
    VariantError,
)
from gvwire.shared_data import SharedData
from gvwire.signature import slice_signature, split_signature
from gvwire.simple_types import Bool, Byte, Double, Int16, Int32, Int64, Uint16, Uint32, Uint64
from gvwire.string_types import ObjectPath, Signature, Str
from gvwire.structure import Structure
from gvwire.variant import Variant
from gvwire.variant_type import VariantType

__version__ = '0.1.0'

__all__ = [
    'Array',
    'BadDataError',
    'Bool',
    'Boxed',
    'Byte',
    'ByteOrder',
    'Dict',
    'DictEntry',
    'Double',
    'EncodingContext',
    'ExcessDataError',
    'IncorrectTypeError',
    'InsufficientDataError',
    'Int16',
    'Int32',
    'Int64',
    'MaxDepthExceededError',
    'ObjectPath',
    'SharedData',
    'Signature',
    'Str',
    'Structure',
    'TooLongError',
    'Uint16',
    'Uint32',
    'Uint64',
    'Variant',
    'VariantError',
    'VariantType',
    'from_bytes',
    'slice_bytes',
    'slice_signature',
    'split_signature',
    'to_bytes',
]
