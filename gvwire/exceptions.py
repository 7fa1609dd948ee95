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


class VariantError(Exception):
    """Base class for every error raised while encoding, slicing or decoding a value."""
    pass


class InsufficientDataError(VariantError):
    """Raised when the buffer or the signature is shorter than what is needed to complete a parse step."""
    pass


class ExcessDataError(VariantError):
    """Raised when a construct extracted no meaningful bytes, or when bytes are left over after a complete value."""
    pass


class IncorrectTypeError(VariantError):
    """Raised when a signature does not match the expected type, or a value is cast to the wrong kind."""
    pass


class MaxDepthExceededError(IncorrectTypeError):
    """Raised when containers are nested deeper than the context allows."""
    pass


class BadDataError(VariantError):
    """Raised when there are enough bytes but they are not a valid encoding for the type."""
    pass


class TooLongError(VariantError):
    pass
