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
from enum import IntEnum
from typing import Any


class StatusCode(IntEnum):
    """Processing states reported in the ``status.code`` of a resource."""

    WAITING = 0
    QUEUED = 1
    STARTED = 2
    IN_PROGRESS = 3
    SUMMARIZED = 4
    FINISHED = 5
    UPLOADING = 6
    FAULTY = -1
    UNKNOWN = -2
    RUNNABLE = -3


def status_code(envelope: Mapping[str, Any] | None) -> StatusCode:
    """Extract the status code; anything unreadable maps to UNKNOWN."""
    if not isinstance(envelope, Mapping):
        return StatusCode.UNKNOWN
    status = envelope.get("status")
    raw = status.get("code") if isinstance(status, Mapping) else status
    try:
        return StatusCode(int(raw))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return StatusCode.UNKNOWN


def is_resource_ready(envelope: Mapping[str, Any] | None) -> bool:
    return status_code(envelope) is StatusCode.FINISHED
