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
Default capability for opaque object framing: `dumps`/`loads` over pickle.

Reducers registered with `register_custom_pickler` are layered on top of the stdlib `copyreg` table, they only apply to
objects serialized through this module and never leak into the process-wide `copyreg` registry.

>>> loads(dumps({'a': (1, 2.5)}))
{'a': (1, 2.5)}
"""

import copyreg
import io
import pickle
from typing import Any, Callable, TypeVar

T = TypeVar('T')

Reducer = Callable[[Any], tuple[Callable[..., Any], tuple[Any, ...]]]

_custom_reducers: dict[type, Reducer] = {}


def dumps(obj: object) -> bytes:
    buffer = io.BytesIO()
    pickler = pickle.Pickler(buffer, protocol=pickle.DEFAULT_PROTOCOL)
    # registered reducers win, anything else falls back to what copyreg knows (re.Pattern, ...)
    pickler.dispatch_table = {**copyreg.dispatch_table, **_custom_reducers}
    pickler.dump(obj)
    return buffer.getvalue()


def loads(data: bytes) -> object:
    """The reconstruction function travels inside the data, so the stock unpickler is enough."""
    return pickle.loads(data)


def register_custom_pickler(
    type_: type[T],
    /,
    *,
    serializer: Callable[[T], bytes],
    deserializer: Callable[[bytes], T],
) -> None:
    """Serialize instances of `type_` as `deserializer(serializer(obj))` when they go through `dumps`.

    The `deserializer` must be importable by reference (a module-level function), since pickle stores it by name.
    """
    def reduce(obj: T) -> tuple[Callable[[bytes], T], tuple[bytes]]:
        return deserializer, (serializer(obj),)

    _custom_reducers[type_] = reduce
