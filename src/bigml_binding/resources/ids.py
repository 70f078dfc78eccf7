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
from enum import Enum
import re
from typing import Any, Union

from bigml_binding.exceptions import InvalidResourceIdError


class ResourceKind(str, Enum):
    """Resource types handled by this binding (URL path segment)."""

    CLUSTER = "cluster"
    CENTROID = "centroid"


ID_BODY_RE = r"[a-zA-Z0-9]{24}"

ID_PATTERNS: dict[ResourceKind, re.Pattern[str]] = {
    kind: re.compile(rf"{kind.value}/{ID_BODY_RE}") for kind in ResourceKind
}

# A bare identifier ("cluster/<24 chars>") or the envelope returned for it.
ResourceRef = Union[str, Mapping[str, Any]]


def is_valid_id(kind: ResourceKind, value: object) -> bool:
    return isinstance(value, str) and ID_PATTERNS[kind].fullmatch(value) is not None


def resource_id(ref: ResourceRef | None, kind: ResourceKind) -> str:
    """Normalize `ref` to a validated identifier of `kind`.

    Envelopes contribute their ``resource`` field. Raises InvalidResourceIdError
    for anything else, including ``None`` and empty strings.
    """
    value = ref.get("resource") if isinstance(ref, Mapping) else ref
    if not is_valid_id(kind, value):
        raise InvalidResourceIdError(kind.value, value)
    return value  # type: ignore[return-value]
