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

# Signatures are at most 255 bytes long so their length fits in the single byte prefix of a 'g' value.
MAX_SIGNATURE_LENGTH = 255

# Characters of types that can be used as keys of dict entries.
BASIC_SIGNATURE_CHARS = frozenset('ybnqiuxtdsog')

STRUCT_OPEN = '('
STRUCT_CLOSE = ')'
DICT_ENTRY_OPEN = '{'
DICT_ENTRY_CLOSE = '}'
