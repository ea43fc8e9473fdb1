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

from enum import Enum, auto
from typing import Final, Literal, TypeAlias

# byte-widths of the fixed-size integer encodings
BYTE = 1
SHORT = 2
INT = 4
LONG = 8

INT_WIDTHS = (BYTE, SHORT, INT, LONG)

# width of the length field that prefixes strings, byte sequences, lists and opaque objects
LENGTH_FIELD_WIDTH = INT

# value of the length field for a null string or byte sequence
NULL_LENGTH = -1


class _UseSettings(Enum):
    TOKEN = auto()


# default for keyword arguments whose value comes from the global settings when not given explicitly
USE_SETTINGS: Final = _UseSettings.TOKEN
UseSettings: TypeAlias = Literal[_UseSettings.TOKEN]
