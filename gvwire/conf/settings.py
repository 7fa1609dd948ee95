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

from pydantic import PositiveInt

from gvwire.context import ByteOrder
from gvwire.utils import pydantic


class GVWireSettings(pydantic.BaseModel):
    # Byte order used by contexts built from settings: "little", "big" or "native"
    DEFAULT_BYTE_ORDER: ByteOrder = ByteOrder.NATIVE

    # Maximum container nesting, each array, struct, dict entry and boxed variant counts as one level
    MAX_DEPTH: PositiveInt = 64

    # Maximum payload length of a single array in bytes, 64 MiB
    MAX_ARRAY_LENGTH: PositiveInt = 64 * 1024 * 1024

    # An array with a declared length of 0 extracted no bytes, it is rejected unless this is enabled
    ALLOW_EMPTY_ARRAYS: bool = False

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'GVWireSettings':
        """Load settings from a yaml file, which can use the `extends` key to build on another settings file."""
        from gvwire.conf import CONF_DIR
        from gvwire.utils.yaml import model_from_extended_yaml
        return model_from_extended_yaml(cls, filepath=filepath, custom_root=CONF_DIR)
