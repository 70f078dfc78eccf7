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

from dataclasses import dataclass, field
from enum import Enum

from bigml_binding.exceptions import (
    BigMLError,
    ConfigurationError,
    ResourceRequestError,
    TransportError,
)
from bigml_binding.platform.protocols import Envelope


class ErrorKind(str, Enum):
    """Why a resource operation produced no envelope."""

    INVALID_ARGUMENT = "invalid_argument"
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    REMOTE = "remote"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Result:
    """Outcome of a resource operation.

    Operations never raise: they return either a success carrying the
    envelope, or a failure carrying an ErrorKind, a message and (for remote
    errors) the HTTP status. ``bool(result)`` tells them apart.
    """

    value: Envelope | None = None
    error: ErrorKind | None = None
    message: str | None = None
    status_code: int | None = None
    exception: BaseException | None = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Envelope) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        exception: BaseException | None = None,
    ) -> "Result":
        return cls(error=error, message=message, status_code=status_code, exception=exception)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Result":
        if isinstance(exc, ResourceRequestError):
            return cls.failure(
                ErrorKind.REMOTE, exc.message, status_code=exc.status_code, exception=exc
            )
        if isinstance(exc, TransportError):
            kind = ErrorKind.TRANSPORT
        elif isinstance(exc, ConfigurationError):
            kind = ErrorKind.CONFIGURATION
        elif isinstance(exc, ValueError):
            # InvalidResourceIdError and malformed JSON arguments
            kind = ErrorKind.INVALID_ARGUMENT
        else:
            kind = ErrorKind.UNEXPECTED
        return cls.failure(kind, str(exc) or type(exc).__name__, exception=exc)

    def unwrap(self) -> Envelope:
        """Return the envelope or raise the error that caused the failure."""
        if self.ok:
            return self.value if self.value is not None else {}
        if self.exception is not None:
            raise self.exception
        raise BigMLError(f"{self.error.value}: {self.message}")  # type: ignore[union-attr]
