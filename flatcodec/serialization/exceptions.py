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


class SerializationError(Exception):
    """Base class for every error produced while encoding or decoding."""


class OutOfDataError(SerializationError):
    """A read needs more bytes than what is left in the buffer."""


class BadDataError(SerializationError):
    """The bytes (or text) being decoded are not a valid encoding."""


class TooLongError(SerializationError):
    """A declared length is above the configured maximum."""


class InvalidArgumentError(SerializationError):
    """The caller passed an argument that makes the operation impossible, no data was produced or consumed."""


class UnknownVariantError(SerializationError):
    """An enum ordinal does not match any of the given variants, only used when decoding with `strict=True`."""

    def __init__(self, ordinal: int, variant_count: int) -> None:
        super().__init__(f'ordinal {ordinal} has no variant (there are {variant_count} variants)')
        self.ordinal = ordinal
        self.variant_count = variant_count


class ExternalCapabilityError(SerializationError):
    """The injected object capability failed to reconstruct an object, the original exception is the `__cause__`."""


class ListParseError(BadDataError):
    """A readable list text could not be parsed, `offset` is the text position where parsing broke."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f'{message} (at offset {offset})')
        self.offset = offset
