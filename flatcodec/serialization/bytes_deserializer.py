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

from typing_extensions import override

from flatcodec.utils.result import Err, Ok, Result, propagate_result

from .deserializer import Deserializer
from .exceptions import OutOfDataError, SerializationError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation keeps a view of the whole buffer and the offset of the next byte to read. The offset only moves
    forward and always stays within `0 <= offset <= len(buffer)`.
    """

    def __init__(self, data: Buffer) -> None:
        self._view = memoryview(data).cast('B')
        self._offset = 0

    @override
    def finalize(self) -> Result[None, SerializationError]:
        if not self.is_empty():
            return Err(SerializationError('trailing data'))
        del self._view
        return Ok(None)

    @override
    def is_empty(self) -> bool:
        return self._offset == len(self._view)

    @override
    def cur_pos(self) -> int:
        return self._offset

    @override
    def remaining(self) -> int:
        return len(self._view) - self._offset

    @override
    def peek_byte(self) -> Result[int, SerializationError]:
        if self.is_empty():
            return Err(OutOfDataError('not enough bytes to read'))
        return Ok(self._view[self._offset])

    @override
    def peek_bytes(self, n: int) -> Result[memoryview, SerializationError]:
        if n < 0:
            return Err(SerializationError('value cannot be negative'))
        if self.remaining() < n:
            return Err(OutOfDataError(f'not enough bytes to read: {n} requested, {self.remaining()} left'))
        return Ok(self._view[self._offset:self._offset + n])

    @propagate_result
    @override
    def read_byte(self) -> Result[int, SerializationError]:
        b = self.peek_byte().unwrap_or_propagate()
        self._offset += 1
        return Ok(b)

    @propagate_result
    @override
    def read_bytes(self, n: int) -> Result[memoryview, SerializationError]:
        b = self.peek_bytes(n).unwrap_or_propagate()
        self._offset += n
        return Ok(b)

    @override
    def read_all(self) -> Result[memoryview, SerializationError]:
        b = self._view[self._offset:]
        self._offset = len(self._view)
        return Ok(b)
