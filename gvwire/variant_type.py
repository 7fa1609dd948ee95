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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, final

from typing_extensions import Self

from gvwire.context import EncodingContext
from gvwire.exceptions import ExcessDataError, IncorrectTypeError
from gvwire.serializer import Serializer
from gvwire.shared_data import SharedData
from gvwire.types import Buffer

if TYPE_CHECKING:
    from gvwire.variant import Variant


class VariantType(ABC):
    """ Every concrete type of the type algebra, leaf or container, implements this class.

    Class level properties describe the type kind (alignment and signature character), instances hold a value of that
    kind. Containers only ever talk to their children through this interface, they never need to know the concrete
    kind of a child.

    The three byte-level operations are inverses of each other and must agree on padding:

    - `encode_into` appends padding and payload to a serializer;
    - `slice_data` returns the view holding exactly one encoded value, leading padding included, without necessarily
      materializing it;
    - `decode` materializes the value, consuming the same span `slice_data` reports.
    """

    __slots__ = ()

    # XXX: subclasses must define these values:
    SIGNATURE_CHAR: ClassVar[str]
    SIGNATURE_STR: ClassVar[str]
    ALIGNMENT: ClassVar[int]

    @final
    @classmethod
    def signature_char(cls) -> str:
        return cls.SIGNATURE_CHAR

    @final
    @classmethod
    def signature_str(cls) -> str:
        return cls.SIGNATURE_STR

    @final
    @classmethod
    def alignment(cls) -> int:
        return cls.ALIGNMENT

    @final
    @classmethod
    def padding(cls, position: int, context: EncodingContext) -> int:
        """ Number of zero bytes needed before a value of this type starting at the absolute `position`.
        """
        return (cls.ALIGNMENT - (position % cls.ALIGNMENT)) % cls.ALIGNMENT

    @final
    @classmethod
    def add_padding(cls, serializer: Serializer, context: EncodingContext) -> None:
        serializer.write_padding(cls.padding(serializer.cur_pos(), context))

    def signature(self) -> str:
        """ Signature of this value, containers derive it from their children.
        """
        return self.SIGNATURE_STR

    @abstractmethod
    def encode_into(self, serializer: Serializer, context: EncodingContext) -> None:
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def slice_data(cls, data: SharedData, signature: str, context: EncodingContext) -> SharedData:
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def decode(cls, data: SharedData, signature: str, context: EncodingContext) -> Self:
        raise NotImplementedError

    @classmethod
    def slice_signature(cls, signature: str) -> str:
        """ The prefix of `signature` that is a complete signature of this type.

        The default implementation is for types with single character signatures.
        """
        if not signature.startswith(cls.SIGNATURE_CHAR):
            raise IncorrectTypeError(f'expected signature {cls.SIGNATURE_CHAR!r}, got {signature!r}')
        return signature[:1]

    @classmethod
    def ensure_correct_signature(cls, signature: str) -> None:
        """ Raise IncorrectTypeError unless `signature` is exactly one complete signature of this type.
        """
        sliced = cls.slice_signature(signature)
        if len(sliced) != len(signature):
            raise IncorrectTypeError(f'unexpected trailing signature {signature[len(sliced):]!r} in {signature!r}')

    @classmethod
    def matches(cls, variant: Variant) -> bool:
        """ Whether the variant holds a value of this type.
        """
        return type(variant.inner) is cls

    @classmethod
    def from_variant(cls, variant: Variant) -> Self:
        """ The value held by the variant, which must be of this type.
        """
        inner = variant.inner
        if type(inner) is not cls:
            raise IncorrectTypeError(f'expected {cls.__name__}, variant holds {type(inner).__name__}')
        return inner  # type: ignore[return-value]

    @classmethod
    def take_from_variant(cls, variant: Variant) -> Self:
        """ Like `from_variant`, for callers that are done with the variant and are taking over its value.
        """
        return cls.from_variant(variant)

    def to_variant(self) -> Variant:
        from gvwire.variant import Variant
        return Variant(self)

    @final
    def to_bytes(self, context: Optional[EncodingContext] = None) -> bytes:
        """ Shortcut to encode this value as a whole message.
        """
        if context is None:
            context = EncodingContext.default()
        serializer = Serializer.build_bytes_serializer()
        self.encode_into(serializer, context)
        return bytes(serializer.finalize())

    @final
    @classmethod
    def from_bytes(
        cls,
        data: Buffer,
        signature: Optional[str] = None,
        context: Optional[EncodingContext] = None,
    ) -> Self:
        """ Shortcut to decode a whole message holding a single value of this type.

        `signature` defaults to the signature of the type kind, which is only enough for types without children.
        Trailing bytes after the value are an ExcessDataError.
        """
        if signature is None:
            signature = cls.SIGNATURE_STR
        if context is None:
            context = EncodingContext.default()
        cls.ensure_correct_signature(signature)
        view = SharedData(data)
        extent = cls.slice_data(view, signature, context)
        if len(extent) != len(view):
            raise ExcessDataError(f'{len(view) - len(extent)} trailing bytes after value')
        return cls.decode(extent, signature, context)
