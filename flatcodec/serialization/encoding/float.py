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
This module implements 32-bit (float) and 64-bit (double) IEEE-754 values.

The bit pattern of the value is reinterpreted as a signed integer of the same width and written with the fixed-size
int encoding, or with the nullable int encoding for the nullable variants. Special values keep their exact pattern:

>>> se = Serializer.build_bytes_serializer()
>>> encode_double(se, 1.5)
>>> encode_double(se, -0.0)
>>> encode_double(se, float('inf'))
>>> encode_float(se, 1.5)
>>> bytes(se.finalize()).hex()
'3ff800000000000080000000000000007ff00000000000003fc00000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('3ff800000000000080000000000000007ff00000000000003fc00000'))
>>> decode_double(de)
Ok(1.5)
>>> decode_double(de)
Ok(-0.0)
>>> decode_double(de)
Ok(inf)
>>> decode_float(de)
Ok(1.5)

The pattern of `-0.0` is the minimum int of the width, so the nullable variants need the extra byte for it:

>>> se = Serializer.build_bytes_serializer()
>>> encode_nullable_float(se, -0.0)
>>> encode_nullable_float(se, None)
>>> bytes(se.finalize()).hex()
'80000000018000000000'

Python floats are doubles, so a 32-bit float is rounded to single precision when encoded. NaN payloads of both widths
keep their exact bits.

>>> from flatcodec.serialization import decode_from_bytes, encode_to_bytes
>>> decode_from_bytes(decode_float, encode_to_bytes(encode_float, 0.1))
Ok(0.10000000149011612)
"""

import math
import struct
from typing import Optional

from flatcodec.serialization import Deserializer, SerializationError, Serializer
from flatcodec.serialization.consts import INT, LONG
from flatcodec.serialization.encoding.int import decode_int, encode_int
from flatcodec.serialization.encoding.nullable_int import decode_nullable_int, encode_nullable_int
from flatcodec.utils.result import Ok, Result, propagate_result


# float32 layout: 1 sign bit, 8 exponent bits, 23 mantissa bits
_FLOAT_EXPONENT_BITS = 0x7f800000
_FLOAT_MANTISSA_BITS = 0x007fffff
_FLOAT_QUIET_BIT = 0x00400000
_DOUBLE_EXPONENT_BITS = 0x7ff0000000000000
# a float32 mantissa sits at the top of the 52-bit double mantissa
_MANTISSA_SHIFT = 52 - 23


def float_to_bits(value: float) -> int:
    """Bit pattern of `value` rounded to single precision, as a signed 32-bit int.

    NaNs are narrowed by hand, keeping the sign and the top mantissa bits, so a NaN read with `bits_to_float` gets
    back its exact pattern (`struct` would quiet a signaling NaN).

    >>> hex(float_to_bits(1.0))
    '0x3f800000'
    >>> hex(float_to_bits(bits_to_float(0x7f800001)))
    '0x7f800001'
    """
    if math.isnan(value):
        double_bits = int.from_bytes(struct.pack('!d', value), byteorder='big')
        mantissa = (double_bits >> _MANTISSA_SHIFT) & _FLOAT_MANTISSA_BITS
        if not mantissa:
            # payload only in bits a float32 can't hold, it must stay a NaN
            mantissa = _FLOAT_QUIET_BIT
        bits = (double_bits >> 63) << 31 | _FLOAT_EXPONENT_BITS | mantissa
        return int.from_bytes(bits.to_bytes(INT, byteorder='big'), byteorder='big', signed=True)
    try:
        data = struct.pack('!f', value)
    except OverflowError:
        raise ValueError(f'{value!r} is out of range for a 32-bit float')
    return int.from_bytes(data, byteorder='big', signed=True)


def bits_to_float(bits: int) -> float:
    """Value of a signed 32-bit float pattern, NaN payloads are widened into the double without being quieted."""
    unsigned = bits & 0xffffffff
    mantissa = unsigned & _FLOAT_MANTISSA_BITS
    if unsigned & _FLOAT_EXPONENT_BITS == _FLOAT_EXPONENT_BITS and mantissa:
        double_bits = (unsigned >> 31) << 63 | _DOUBLE_EXPONENT_BITS | mantissa << _MANTISSA_SHIFT
        return struct.unpack('!d', double_bits.to_bytes(LONG, byteorder='big'))[0]
    return struct.unpack('!f', unsigned.to_bytes(INT, byteorder='big'))[0]


def double_to_bits(value: float) -> int:
    """Bit pattern of `value` as a signed 64-bit int.

    >>> double_to_bits(-0.0) == -2**63
    True
    """
    return int.from_bytes(struct.pack('!d', value), byteorder='big', signed=True)


def bits_to_double(bits: int) -> float:
    return struct.unpack('!d', bits.to_bytes(LONG, byteorder='big', signed=True))[0]


def encode_float(serializer: Serializer, value: float) -> None:
    encode_int(serializer, float_to_bits(value), length=INT)


@propagate_result
def decode_float(deserializer: Deserializer) -> Result[float, SerializationError]:
    bits = decode_int(deserializer, length=INT).unwrap_or_propagate()
    return Ok(bits_to_float(bits))


def encode_nullable_float(serializer: Serializer, value: Optional[float]) -> None:
    encode_nullable_int(serializer, None if value is None else float_to_bits(value), length=INT)


@propagate_result
def decode_nullable_float(deserializer: Deserializer) -> Result[Optional[float], SerializationError]:
    bits = decode_nullable_int(deserializer, length=INT).unwrap_or_propagate()
    return Ok(None if bits is None else bits_to_float(bits))


def encode_double(serializer: Serializer, value: float) -> None:
    encode_int(serializer, double_to_bits(value), length=LONG)


@propagate_result
def decode_double(deserializer: Deserializer) -> Result[float, SerializationError]:
    bits = decode_int(deserializer, length=LONG).unwrap_or_propagate()
    return Ok(bits_to_double(bits))


def encode_nullable_double(serializer: Serializer, value: Optional[float]) -> None:
    encode_nullable_int(serializer, None if value is None else double_to_bits(value), length=LONG)


@propagate_result
def decode_nullable_double(deserializer: Deserializer) -> Result[Optional[float], SerializationError]:
    bits = decode_nullable_int(deserializer, length=LONG).unwrap_or_propagate()
    return Ok(None if bits is None else bits_to_double(bits))
