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
This module implements encoding of a closed set of variants by their ordinal, as a 4-byte signed int.

The variants are given by the caller, either as an `Enum` subclass (in definition order) or as any ordered sequence.
Nothing about the variant itself (name or value) is written, only its position.

>>> from enum import Enum
>>> class Color(Enum):
...     RED = 'r'
...     GREEN = 'g'
...     BLUE = 'b'

>>> se = Serializer.build_bytes_serializer()
>>> encode_enum(se, Color.BLUE, Color)
>>> encode_enum(se, 'tails', ('heads', 'tails'))
>>> bytes(se.finalize()).hex()
'0000000200000001'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000000200000001'))
>>> decode_enum(de, Color)
Ok(<Color.BLUE: 'b'>)
>>> decode_enum(de, ('heads', 'tails'))
Ok('tails')

An ordinal with no variant is not an error unless `strict=True`:

>>> decode_enum(Deserializer.build_bytes_deserializer(bytes.fromhex('00000007')), Color, strict=False)
Ok(None)
>>> decode_enum(Deserializer.build_bytes_deserializer(bytes.fromhex('00000007')), Color, strict=True)
Err(UnknownVariantError('ordinal 7 has no variant (there are 3 variants)'))
"""

from typing import Iterable, Optional, TypeVar

from flatcodec.conf import get_global_settings
from flatcodec.serialization import Deserializer, SerializationError, Serializer, UnknownVariantError
from flatcodec.serialization.consts import INT, USE_SETTINGS, UseSettings
from flatcodec.serialization.encoding.int import decode_int, encode_int
from flatcodec.utils.result import Err, Ok, Result, propagate_result

T = TypeVar('T')


def resolve_strict(strict: bool | UseSettings) -> bool:
    """ Whether unknown ordinals are errors, the `STRICT_ENUM_DECODING` setting when not given.
    """
    if strict is USE_SETTINGS:
        return get_global_settings().STRICT_ENUM_DECODING
    return strict


def ordinal_of(value: T, variants: Iterable[T]) -> int:
    """ Position of `value` among `variants`, raises ValueError if it's not one of them.

    >>> ordinal_of('c', 'abc')
    2
    """
    for ordinal, variant in enumerate(variants):
        if variant == value:
            return ordinal
    raise ValueError(f'{value!r} is not one of the variants')


def variant_at(ordinal: int, variants: Iterable[T]) -> Optional[T]:
    """ Variant at position `ordinal`, or None when there is no such position.

    >>> variant_at(0, 'abc'), variant_at(3, 'abc'), variant_at(-1, 'abc')
    ('a', None, None)
    """
    if ordinal < 0:
        return None
    for i, variant in enumerate(variants):
        if i == ordinal:
            return variant
    return None


def encode_enum(serializer: Serializer, value: T, variants: Iterable[T]) -> None:
    """ Encodes the ordinal of `value` as a non-nullable 4-byte int.

    This modules's docstring has more details and examples.
    """
    encode_int(serializer, ordinal_of(value, variants), length=INT)


@propagate_result
def decode_enum(
    deserializer: Deserializer,
    variants: Iterable[T],
    *,
    strict: bool | UseSettings = USE_SETTINGS,
) -> Result[Optional[T], SerializationError]:
    """ Decodes an ordinal and returns the matching variant.

    When no variant matches: returns `Ok(None)`, or `Err(UnknownVariantError)` if `strict`. When `strict` is not given
    it comes from the `STRICT_ENUM_DECODING` setting.
    """
    ordinal = decode_int(deserializer, length=INT).unwrap_or_propagate()
    variants = list(variants)
    variant = variant_at(ordinal, variants)
    if variant is None and resolve_strict(strict):
        return Err(UnknownVariantError(ordinal, len(variants)))
    return Ok(variant)
