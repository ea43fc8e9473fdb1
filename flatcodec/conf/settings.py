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

from pathlib import Path
from typing import Optional, Union

from pydantic import field_validator

from flatcodec.utils import pydantic
from flatcodec.utils.yaml import dict_from_extended_yaml


class CodecSettings(pydantic.BaseModel):
    # Separator used by the byte-buffer form of lists when the caller doesn't give one, must be a single character.
    LIST_SEPARATOR: str = '|'

    # Largest payload (in bytes) that string, bytes and object decoders accept from a length field. `None` disables
    # the check, in which case the length is only bounded by the remaining input.
    MAX_FRAME_LENGTH: Optional[int] = 2**31 - 1

    # When enabled, decoding an enum ordinal with no matching variant is an error instead of `None`.
    STRICT_ENUM_DECODING: bool = False

    @field_validator('LIST_SEPARATOR')
    @classmethod
    def _validate_list_separator(cls, separator: str) -> str:
        if len(separator) != 1:
            raise ValueError(f'LIST_SEPARATOR must be a single character, got {separator!r}')
        return separator

    @field_validator('MAX_FRAME_LENGTH')
    @classmethod
    def _validate_max_frame_length(cls, max_frame_length: Optional[int]) -> Optional[int]:
        if max_frame_length is not None and max_frame_length < 0:
            raise ValueError('MAX_FRAME_LENGTH cannot be negative')
        return max_frame_length

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
