# Copyright 2025 iGenius S.p.A
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

Envelope = dict[str, Any]


@runtime_checkable
class ResourceTransport(Protocol):
    """Issue one REST call per method and return the parsed JSON body.

    Paths are relative to the API root (e.g. ``"centroid"`` or
    ``"centroid/<id>"``). Authentication is the transport's business.
    """

    def create_resource(self, path: str, body: Mapping[str, Any]) -> Envelope: ...

    def get_resource(self, path: str) -> Envelope: ...

    def list_resources(
        self, path: str, query: str | Mapping[str, Any] | None = None
    ) -> Envelope: ...

    def update_resource(self, path: str, body: Mapping[str, Any]) -> Envelope: ...

    def delete_resource(self, path: str) -> Envelope: ...


class ReadinessCheck(Protocol):
    def __call__(self, resource_id: str) -> bool:
        """Return True once the resource reached a terminal success state."""
        ...
