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

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from flatcodec.utils.result import Ok, Result, propagate_result

from .exceptions import SerializationError
from .types import Buffer

if TYPE_CHECKING:
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    """A read cursor over some source of bytes.

    Every read either consumes exactly what it asked for, or returns an `Err` and consumes nothing. There is no way to
    move the cursor backwards.
    """

    def finalize(self) -> Result[None, SerializationError]:
        """Check that all bytes were consumed, the deserializer cannot be used after this."""
        raise TypeError('this deserializer does not support finalization')

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def cur_pos(self) -> int:
        """How many bytes were consumed so far."""
        raise NotImplementedError

    @abstractmethod
    def remaining(self) -> int:
        """How many bytes are left to be read."""
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> Result[int, SerializationError]:
        """Read a single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int) -> Result[memoryview, SerializationError]:
        """Read n bytes but don't consume from buffer."""
        raise NotImplementedError

    @propagate_result
    def peek_struct(self, format: str) -> Result[tuple[Any, ...], SerializationError]:
        size = struct.calcsize(format)
        data = self.peek_bytes(size).unwrap_or_propagate()
        return Ok(struct.unpack(format, data))

    @abstractmethod
    def read_byte(self) -> Result[int, SerializationError]:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int) -> Result[memoryview, SerializationError]:
        """Read exactly n bytes."""
        raise NotImplementedError

    @abstractmethod
    def read_all(self) -> Result[memoryview, SerializationError]:
        """Read all bytes until the reader is empty."""
        raise NotImplementedError

    @propagate_result
    def read_struct(self, format: str) -> Result[tuple[Any, ...], SerializationError]:
        size = struct.calcsize(format)
        data = self.read_bytes(size).unwrap_or_propagate()
        return Ok(struct.unpack(format, data))

    @propagate_result
    def advance(self, n: int) -> Result[None, SerializationError]:
        """Skip n bytes."""
        self.read_bytes(n).unwrap_or_propagate()
        return Ok(None)
