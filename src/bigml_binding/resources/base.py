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
import json
from typing import Any, Callable, ClassVar

from rich.markup import escape

from bigml_binding.exceptions import InvalidResourceIdError
from bigml_binding.helpers.logger import setup_logger
from bigml_binding.platform.protocols import Envelope, ResourceTransport
from bigml_binding.resources.ids import ResourceKind, ResourceRef, resource_id
from bigml_binding.resources.result import Result
from bigml_binding.resources.status import is_resource_ready

logger = setup_logger(__name__, level=None)


def load_json_object(value: str | Mapping[str, Any] | None, name: str) -> dict[str, Any]:
    """Turn an optional JSON object (string or mapping) into a fresh dict."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a JSON object string or mapping")
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"{name} is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"{name} must be a JSON object, got {type(parsed).__name__}")
    return parsed


class ResourceBinding:
    """Retrieve, list, update and delete resources of one kind.

    Every method validates the identifier before touching the network and
    reports problems through a :class:`Result` instead of raising.
    Identifiers may be given bare (``"centroid/<id>"``) or as the envelope
    previously returned by the service.
    """

    kind: ClassVar[ResourceKind]

    def __init__(self, transport: ResourceTransport):
        self.transport = transport

    def _resolve(self, ref: ResourceRef | None) -> str | Result:
        try:
            return resource_id(ref, self.kind)
        except InvalidResourceIdError as e:
            logger.info(f"Wrong {self.kind.value} id")
            return Result.from_exception(e)

    def _call(self, action: str, fn: Callable[..., Envelope], *args: Any) -> Result:
        try:
            return Result.success(fn(*args))
        except Exception as e:
            logger.error(f"Error {action} {self.kind.value}: {escape(str(e))}")
            return Result.from_exception(e)

    def get(self, ref: ResourceRef | None) -> Result:
        """Fetch the current envelope.

        Resources evolve until they reach FINISHED or FAULTY; the envelope
        reflects the state at the time of the call.
        """
        rid = self._resolve(ref)
        if isinstance(rid, Result):
            return rid
        return self._call("retrieving", self.transport.get_resource, rid)

    def is_ready(self, ref: ResourceRef | None) -> bool:
        """Re-fetch the resource and check whether its status is FINISHED."""
        result = self.get(ref)
        return result.ok and is_resource_ready(result.value)

    def list(self, query: str | Mapping[str, Any] | None = None) -> Result:
        """List resources, optionally filtered (``"limit=5;offset=10"`` or a mapping)."""
        return self._call("listing", self.transport.list_resources, self.kind.value, query)

    def update(
        self, ref: ResourceRef | None, changes: str | Mapping[str, Any] | None
    ) -> Result:
        rid = self._resolve(ref)
        if isinstance(rid, Result):
            return rid

        def _update() -> Envelope:
            body = load_json_object(changes, "changes")
            return self.transport.update_resource(rid, body)

        return self._call("updating", _update)

    def delete(self, ref: ResourceRef | None) -> Result:
        rid = self._resolve(ref)
        if isinstance(rid, Result):
            return rid
        return self._call("deleting", self.transport.delete_resource, rid)
