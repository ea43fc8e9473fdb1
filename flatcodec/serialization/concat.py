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
Null-tolerant concatenation of byte buffers.

Values are usually encoded one at a time, each into its own buffer, and the buffers are then joined in call order to
build a message. Any `None` argument contributes nothing:

>>> concat(b'\x01\x02', None, b'\x03')
b'\x01\x02\x03'
>>> concat()
b''
>>> concat(None, None)
b''
"""

from typing import Optional

from .types import Buffer


def concat(*buffers: Optional[Buffer]) -> bytes:
    """Join the given buffers into a freshly allocated `bytes`, skipping `None` arguments."""
    return b''.join(memoryview(buffer) for buffer in buffers if buffer is not None)
