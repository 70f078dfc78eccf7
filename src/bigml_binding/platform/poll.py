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

from dataclasses import dataclass
from enum import Enum
import logging
import time
from typing import Callable

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from bigml_binding.config.settings import Settings, get_settings
from bigml_binding.helpers.logger import setup_logger
from bigml_binding.platform.protocols import ReadinessCheck

logger = setup_logger(__name__, level=None)


class Backoff(str, Enum):
    """How the delay between two readiness checks evolves."""

    FIXED = "fixed"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class PollPolicy:
    """Best-effort wait for a dependency before acting on it.

    Attributes
    ----------
    interval_s: float
        Delay after a negative check. ``0`` disables polling entirely.
    max_attempts: int
        Maximum number of readiness checks.
    backoff: Backoff
        ``FIXED`` sleeps ``interval_s`` every time; ``EXPONENTIAL`` doubles
        the delay after each check, capped at ``max_interval_s``.
    max_interval_s: float
        Upper bound of a single delay with exponential backoff.
    """

    interval_s: float = 3.0
    max_attempts: int = 10
    backoff: Backoff = Backoff.FIXED
    max_interval_s: float = 60.0

    def __post_init__(self):
        if self.interval_s < 0:
            raise ValueError(f"interval_s must be >= 0, got {self.interval_s}")
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")
        if self.max_interval_s < self.interval_s:
            object.__setattr__(self, "max_interval_s", self.interval_s)
        object.__setattr__(self, "backoff", Backoff(self.backoff))

    @classmethod
    def from_millis(
        cls,
        wait_ms: int,
        retries: int,
        backoff: Backoff | str = Backoff.FIXED,
    ) -> "PollPolicy":
        # Non-positive values disable polling rather than failing.
        return cls(
            interval_s=max(wait_ms, 0) / 1000.0,
            max_attempts=max(retries, 0),
            backoff=Backoff(backoff),
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        wait_ms: int | None = None,
        retries: int | None = None,
    ) -> "PollPolicy":
        """Build a policy from explicit overrides, falling back to settings."""
        s = settings or get_settings()
        return cls.from_millis(
            s.wait_interval_ms if wait_ms is None else wait_ms,
            s.max_retries if retries is None else retries,
            backoff=s.poll_backoff,
        )

    @property
    def enabled(self) -> bool:
        return self.interval_s > 0 and self.max_attempts > 0

    def wait_strategy(self):
        if self.backoff is Backoff.EXPONENTIAL:
            return wait_exponential(multiplier=self.interval_s, max=self.max_interval_s)
        return wait_fixed(self.interval_s)


def wait_until_ready(
    check: ReadinessCheck,
    resource_id: str,
    policy: PollPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll `check(resource_id)` until it returns True or the budget runs out.

    Returns whether the resource was seen ready. Running out of attempts is
    not an error: the caller decides what to do with a False. A disabled
    policy returns False without calling `check`. Exceptions raised by
    `check` propagate unchanged.
    """
    if not policy.enabled:
        return False

    retrying = Retrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=policy.wait_strategy(),
        retry=retry_if_result(lambda ready: not ready),
        retry_error_callback=lambda retry_state: False,
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        sleep=sleep,
    )
    return bool(retrying(check, resource_id))
