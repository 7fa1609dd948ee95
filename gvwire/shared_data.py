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
A `SharedData` is a read-only window over a message buffer.

Every view remembers where its first byte sits in the whole message, alignment is always computed against that
absolute position and never against the start of the view itself. Views never copy the underlying buffer, only
`to_bytes()` does.

>>> data = SharedData(b'\x00\x01\x02\x03\x04\x05')
>>> view = data.tail(2)
>>> view.position(), len(view)
(2, 4)
>>> view.head(2).to_bytes()
b'\x02\x03'
>>> view.subset(1, 3).position()
3
>>> try:
...     view.head(5)
... except InsufficientDataError as e:
...     print(e)
not enough bytes: requested 5, available 4
"""

from __future__ import annotations

from typing import Optional

from gvwire.exceptions import InsufficientDataError
from gvwire.types import Buffer


class SharedData:
    __slots__ = ('_view', '_start', '_end', '_base')

    _view: memoryview
    _start: int
    _end: int
    _base: int

    def __init__(self, data: Buffer, *, position: int = 0) -> None:
        """Create a view over the whole of `data`.

        `position` is the absolute offset of `data[0]` in the message, it is only needed when `data` is not the start
        of the message (for example a body that follows a header).
        """
        if position < 0:
            raise ValueError('position cannot be negative')
        self._view = memoryview(data).cast('B')
        self._start = 0
        self._end = len(self._view)
        self._base = position

    @classmethod
    def _new_view(cls, parent: SharedData, start: int, end: int) -> SharedData:
        new = cls.__new__(cls)
        new._view = parent._view
        new._start = start
        new._end = end
        new._base = parent._base
        return new

    def __len__(self) -> int:
        return self._end - self._start

    def len(self) -> int:
        return self._end - self._start

    def is_empty(self) -> bool:
        return self._end == self._start

    def position(self) -> int:
        """Absolute offset of this view's first byte relative to the start of the message."""
        return self._base + self._start

    def head(self, n: int) -> SharedData:
        """View of the first `n` bytes."""
        self._check_available(n)
        return self._new_view(self, self._start, self._start + n)

    def tail(self, n: int) -> SharedData:
        """View without the first `n` bytes."""
        self._check_available(n)
        return self._new_view(self, self._start + n, self._end)

    def subset(self, start: int, end: Optional[int] = None) -> SharedData:
        """View of the bytes in `[start, end)`, relative to this view."""
        if end is None:
            end = len(self)
        if start < 0 or end < start:
            raise ValueError(f'invalid range [{start}, {end})')
        self._check_available(end)
        return self._new_view(self, self._start + start, self._start + end)

    def memoryview(self) -> memoryview:
        return self._view[self._start:self._end]

    def to_bytes(self) -> bytes:
        return bytes(self._view[self._start:self._end])

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise InsufficientDataError(f'index {index} out of range')
        return self._view[self._start + index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SharedData):
            return self.memoryview() == other.memoryview()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.memoryview() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'SharedData(position={self.position()}, data={self.to_bytes().hex()!r})'

    def _check_available(self, n: int) -> None:
        if n < 0:
            raise ValueError('value cannot be negative')
        available = len(self)
        if n > available:
            raise InsufficientDataError(f'not enough bytes: requested {n}, available {available}')
