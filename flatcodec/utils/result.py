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
Decoder outcomes: `Ok(value)` or `Err(error)`, where the error is usually a `SerializationError`.

A decoder that reads through other decoders is wrapped with `@propagate_result`, inside it `unwrap_or_propagate()`
either gives the value or returns the `Err` right away from the wrapped function:

>>> @propagate_result
... def half(n: int) -> Result[int, ValueError]:
...     if n % 2:
...         return Err(ValueError(f'{n} is odd'))
...     return Ok(n // 2)

>>> @propagate_result
... def quarter(n: int) -> Result[int, ValueError]:
...     return half(half(n).unwrap_or_propagate())

>>> quarter(12)
Ok(3)
>>> quarter(6)
Err(ValueError('3 is odd'))

Encoders have no error channel, they turn a bad `Err` into an exception with `unwrap_or_raise()`:

>>> half(3).unwrap_or_raise()
Traceback (most recent call last):
...
ValueError: 3 is odd
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Generic, Literal, NoReturn, ParamSpec, TypeAlias, TypeVar

T = TypeVar('T', covariant=True)
E = TypeVar('E', covariant=True)
P = ParamSpec('P')


class Ok(Generic[T]):
    """The decoded value."""

    __slots__ = ('_value',)
    __match_args__ = ('_value',)

    def __init__(self, value: T) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f'Ok({self._value!r})'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Ok) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Ok, self._value))

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def err(self) -> None:
        return None

    def unwrap(self) -> T:
        return self._value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(self, f'expected an error, got {self!r}')

    def unwrap_or_raise(self) -> T:
        return self._value

    def unwrap_or_propagate(self) -> T:
        return self._value


class Err(Generic[E]):
    """Why decoding failed.

    `cause` is the exception caught while decoding, if any. It becomes the `__cause__` of the error, so the original
    failure shows up in the traceback once the error is raised.
    """

    __slots__ = ('_value',)
    __match_args__ = ('_value',)

    def __init__(self, value: E, cause: BaseException | None = None) -> None:
        self._value = value
        if cause is not None and isinstance(value, BaseException):
            value.__cause__ = cause

    def __repr__(self) -> str:
        return f'Err({self._value!r})'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Err) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Err, self._value))

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def err(self) -> E:
        return self._value

    def unwrap(self) -> NoReturn:
        exc = UnwrapError(self, f'expected a value, got {self!r}')
        if isinstance(self._value, BaseException):
            raise exc from self._value
        raise exc

    def unwrap_err(self) -> E:
        return self._value

    def unwrap_or_raise(self) -> NoReturn:
        assert isinstance(self._value, BaseException), f'cannot raise a non-exception error: {self._value!r}'
        raise self._value

    def unwrap_or_propagate(self) -> NoReturn:
        raise _ResultPropagationException(self)


Result: TypeAlias = Ok[T] | Err[E]


class UnwrapError(Exception):
    """Raised by `unwrap()` on an `Err` and by `unwrap_err()` on an `Ok`, the offending result is kept in `result`."""

    def __init__(self, result: Result[Any, Any], message: str) -> None:
        super().__init__(message)
        self.result = result


class _ResultPropagationException(Exception):
    def __init__(self, err: Err[Any]) -> None:
        super().__init__('unwrap_or_propagate() called outside of a @propagate_result function')
        self.err = err


def propagate_result(f: Callable[P, Result[T, E]]) -> Callable[P, Result[T, E]]:
    """Let `f` use `unwrap_or_propagate()`, an `Err` propagated inside it becomes its return value."""
    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        try:
            return f(*args, **kwargs)
        except _ResultPropagationException as e:
            return e.err  # type: ignore[return-value]

    return wrapper
