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
import time
from typing import Any, Callable

from bigml_binding.config.settings import Settings, get_settings
from rich.markup import escape

from bigml_binding.exceptions import InvalidResourceIdError
from bigml_binding.helpers.logger import setup_logger
from bigml_binding.platform.poll import PollPolicy, wait_until_ready
from bigml_binding.platform.protocols import ReadinessCheck, ResourceTransport
from bigml_binding.resources.base import ResourceBinding, load_json_object
from bigml_binding.resources.cluster import Cluster
from bigml_binding.resources.ids import ResourceKind, ResourceRef, resource_id
from bigml_binding.resources.result import Result

logger = setup_logger(__name__, level=None)


class Centroid(ResourceBinding):
    """Create, retrieve, list, update and delete centroids.

    A centroid is the cluster center closest to a given input data point,
    computed from a trained cluster.

    Parameters
    ----------
    transport:
        HTTP collaborator issuing the REST calls.
    cluster_ready:
        Readiness check for the parent cluster. Defaults to fetching the
        cluster through the same transport.
    settings:
        Source of the default poll interval and retry budget.
    sleep:
        Called between readiness checks; injectable for tests.
    """

    kind = ResourceKind.CENTROID

    def __init__(
        self,
        transport: ResourceTransport,
        cluster_ready: ReadinessCheck | None = None,
        settings: Settings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(transport)
        self.settings = settings or get_settings()
        self._cluster_ready = cluster_ready or Cluster(transport).is_ready
        self._sleep = sleep

    def create(
        self,
        cluster: ResourceRef | None,
        input_data: Mapping[str, Any] | None,
        args: str | Mapping[str, Any] | None = None,
        wait_interval_ms: int | None = None,
        max_retries: int | None = None,
        *,
        poll_policy: PollPolicy | None = None,
    ) -> Result:
        """Create a centroid for `input_data` from `cluster`.

        Before creating, the cluster is polled until it is ready or the retry
        budget is exhausted. An exhausted budget does not abort: the request is
        sent anyway and the service decides. ``wait_interval_ms=0`` skips the
        poll.

        Args:
            cluster: ``cluster/<24 alphanumeric chars>`` or a cluster envelope.
            input_data: Field values of the point, forwarded as ``input_data``.
            args: Extra creation parameters (JSON object string or mapping).
                ``cluster`` and ``input_data`` always override same-named keys.
            wait_interval_ms: Delay between readiness checks (default from
                settings, 3000).
            max_retries: Maximum readiness checks (default from settings, 10).
            poll_policy: Full policy; takes precedence over the two above.

        Returns:
            Result: the new centroid envelope, or the failure.
        """
        try:
            cluster_id = resource_id(cluster, ResourceKind.CLUSTER)
        except InvalidResourceIdError as e:
            logger.info("Wrong cluster id")
            return Result.from_exception(e)

        try:
            body = load_json_object(args, "args")
            body["cluster"] = cluster_id
            body["input_data"] = input_data

            policy = poll_policy or PollPolicy.from_settings(
                self.settings, wait_ms=wait_interval_ms, retries=max_retries
            )
            if policy.enabled and not wait_until_ready(
                self._cluster_ready, cluster_id, policy, sleep=self._sleep
            ):
                logger.warning(
                    f"Cluster {cluster_id} not ready after {policy.max_attempts} checks, "
                    "creating the centroid anyway"
                )

            envelope = self.transport.create_resource(self.kind.value, body)
        except Exception as e:
            logger.error(f"Error creating centroid: {escape(str(e))}")
            return Result.from_exception(e)

        resource = escape(str(envelope.get("resource")))
        logger.info(f"Centroid [cyan]{resource}[/cyan] created from {cluster_id}")
        return Result.success(envelope)
