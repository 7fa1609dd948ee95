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
Whole-message entry points.

These are the functions to use when the buffer holds exactly one value, they check the signature before touching the
data and reject trailing bytes:

>>> from gvwire.array import Array
>>> from gvwire.context import ByteOrder, EncodingContext
>>> from gvwire.simple_types import Uint32
>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE)
>>> from structlog.testing import capture_logs
>>> with capture_logs() as logs:
...     data = to_bytes(Array.from_values([Uint32(1), Uint32(2), Uint32(3)]), ctx)
...     value = from_bytes(data, 'au', ctx)
>>> data.hex()
'0c000000010000000200000003000000'
>>> value.get(Array).to_list(Uint32)
[Uint32(1), Uint32(2), Uint32(3)]
>>> [log['event'] for log in logs]
['encoded value', 'decoded value']
"""

from typing import Optional

from structlog import get_logger

from gvwire.context import EncodingContext
from gvwire.exceptions import ExcessDataError, IncorrectTypeError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.signature import decode, slice_data, slice_signature
from gvwire.types import Buffer
from gvwire.variant import Variant
from gvwire.variant_type import VariantType

logger = get_logger()


def to_bytes(value: Variant | VariantType, context: Optional[EncodingContext] = None) -> bytes:
    """ Encode a value as a whole message.
    """
    if context is None:
        context = EncodingContext.default()
    log = logger.new()
    serializer = Serializer.build_bytes_serializer()
    if isinstance(value, Variant):
        value.encode_value_into(serializer, context)
    else:
        value.encode_into(serializer, context)
    data = bytes(serializer.finalize())
    log.debug('encoded value', byte_order=context.byte_order.value, size=len(data))
    return data


def _check_signature(signature: str) -> None:
    sliced = slice_signature(signature)
    if sliced != signature:
        raise IncorrectTypeError(f'expected a single complete type, got {signature!r}')


def slice_bytes(data: Buffer, signature: str, context: Optional[EncodingContext] = None) -> SharedData:
    """ View of the value of type `signature` at the front of `data`, trailing bytes are ignored.
    """
    if context is None:
        context = EncodingContext.default()
    _check_signature(signature)
    return slice_data(SharedData(data), signature, context)


def from_bytes(data: Buffer, signature: str, context: Optional[EncodingContext] = None) -> Variant:
    """ Decode a message holding exactly one value of type `signature`.

    The extent of the value is computed before anything is decoded, so malformed structure and trailing bytes are
    rejected without materializing any value.
    """
    if context is None:
        context = EncodingContext.default()
    log = logger.new()
    _check_signature(signature)
    view = SharedData(data)
    extent = slice_data(view, signature, context)
    if len(extent) != len(view):
        log.debug('trailing data', signature=signature, size=len(view), value_size=len(extent))
        raise ExcessDataError(f'{len(view) - len(extent)} trailing bytes after value')
    value = Variant(decode(extent, signature, context))
    log.debug('decoded value', signature=signature, size=len(extent))
    return value
