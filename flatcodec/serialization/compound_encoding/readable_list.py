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

"""
Human readable text form of a list of strings.

Instead of escaping delimiters, every element is prefixed by its length, so the separators may appear freely inside
the elements. Layout, where `pre` is a mandatory non-empty separator and `post` an optional terminator:

    <count><pre><len_1 or -1><pre>[<elem_1>]<post><len_2 or -1><pre>[<elem_2>]<post>...

A `None` element has the length `-1` and no characters, but still gets its `post`.

>>> serialize_list_to_readable_string(['a', 'bb'], '|')
Ok('2|1|a2|bb')
>>> deserialize_list_from_readable_string('2|1|a2|bb', '|')
Ok(['a', 'bb'])

>>> serialize_list_to_readable_string(['x|y', None, ''], ':', ';')
Ok('3:3:x|y;-1:;0:;')
>>> deserialize_list_from_readable_string('3:3:x|y;-1:;0:;', ':', ';')
Ok(['x|y', None, ''])

>>> serialize_list_to_readable_string([], '|')
Ok('0|')
>>> serialize_list_to_readable_string(['a'], '')
Err(InvalidArgumentError('pre cannot be None or empty'))

Parse errors tell where the text broke:

>>> deserialize_list_from_readable_string('2|1|a2|b', '|')
Err(ListParseError('element of length 2 runs past the end of the text (at offset 7)'))
>>> deserialize_list_from_readable_string('2|1|ax|bb', '|')
Err(ListParseError("'x' is not an integer (at offset 5)"))
"""

import re
from typing import Iterable, Optional

from structlog import get_logger

from flatcodec.serialization import InvalidArgumentError, ListParseError, SerializationError
from flatcodec.utils.result import Err, Ok, Result, propagate_result

logger = get_logger()

NULL_ELEMENT_LENGTH = -1

_INTEGER_RE = re.compile(r'-?[0-9]+')


def _check_separators(pre: Optional[str], post: Optional[str]) -> Result[tuple[str, str], SerializationError]:
    if not pre:
        return Err(InvalidArgumentError('pre cannot be None or empty'))
    return Ok((pre, post or ''))


@propagate_result
def serialize_list_to_readable_string(
    items: Iterable[object],
    pre: str,
    post: Optional[str] = '',
) -> Result[str, SerializationError]:
    """ Build the readable text form of `items`, elements that aren't `str` are converted with `str()`.

    This modules's docstring has more details and examples.
    """
    pre, post = _check_separators(pre, post).unwrap_or_propagate()
    items = list(items)
    parts = [str(len(items)), pre]
    for item in items:
        if item is None:
            parts.extend([str(NULL_ELEMENT_LENGTH), pre, post])
        else:
            text = item if isinstance(item, str) else str(item)
            parts.extend([str(len(text)), pre, text, post])
    return Ok(''.join(parts))


def _read_integer(text: str, start: int, pre: str) -> Result[tuple[int, int], ListParseError]:
    """Read the integer between `start` and the next `pre`, returns the integer and the position after `pre`."""
    end = text.find(pre, start)
    if end < 0:
        return Err(ListParseError('missing separator', start))
    field = text[start:end]
    if not _INTEGER_RE.fullmatch(field):
        return Err(ListParseError(f'{field!r} is not an integer', start))
    return Ok((int(field), end + len(pre)))


@propagate_result
def _parse(text: str, pre: str, post: str) -> Result[list[Optional[str]], SerializationError]:
    count, pos = _read_integer(text, 0, pre).unwrap_or_propagate()
    # every element takes at least one digit and one `pre`
    if count < 0 or count * (1 + len(pre)) > len(text) - pos:
        return Err(ListParseError(f'invalid element count: {count}', 0))
    items: list[Optional[str]] = []
    while len(items) < count:
        field_start = pos
        length, pos = _read_integer(text, pos, pre).unwrap_or_propagate()
        if length == NULL_ELEMENT_LENGTH:
            items.append(None)
        elif length < 0:
            return Err(ListParseError(f'invalid element length: {length}', field_start))
        elif pos + length > len(text):
            return Err(ListParseError(f'element of length {length} runs past the end of the text', pos))
        else:
            items.append(text[pos:pos + length])
            pos += length
        if not text.startswith(post, pos):
            return Err(ListParseError('missing element terminator', pos))
        pos += len(post)
    if pos != len(text):
        return Err(ListParseError('trailing characters after the last element', pos))
    return Ok(items)


@propagate_result
def deserialize_list_from_readable_string(
    text: str,
    pre: str,
    post: Optional[str] = '',
) -> Result[list[Optional[str]], SerializationError]:
    """ Parse the readable text form back into a list of strings and Nones.

    Lengths and the count are found by looking for the next `pre`, element contents only by their declared length.
    This modules's docstring has more details and examples.
    """
    pre, post = _check_separators(pre, post).unwrap_or_propagate()
    result = _parse(text, pre, post)
    if result.is_err():
        logger.new().debug('readable list parse failed', error=str(result.err()), size=len(text))
    return result
