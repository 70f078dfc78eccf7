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

from functools import lru_cache
import time
from typing import Callable

from bigml_binding.config.settings import Settings, get_settings
from bigml_binding.platform.http import HttpTransport
from bigml_binding.platform.protocols import ResourceTransport
from bigml_binding.resources.centroid import Centroid
from bigml_binding.resources.cluster import Cluster


class BigMLClient:
    """Entry point bundling settings, transport and resource bindings.

    >>> client = BigMLClient()
    >>> result = client.centroids.create("cluster/5143a51a37203f2cf7000972", {"age": 30})
    >>> if result:
    ...     print(result.value["resource"])
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: ResourceTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or get_settings()
        self.transport = transport or HttpTransport(self.settings)
        self.clusters = Cluster(self.transport)
        self.centroids = Centroid(
            self.transport,
            cluster_ready=self.cluster_is_ready,
            settings=self.settings,
            sleep=sleep,
        )

    def cluster_is_ready(self, cluster_id: str) -> bool:
        return self.clusters.is_ready(cluster_id)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "BigMLClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@lru_cache(maxsize=1)
def get_client() -> BigMLClient:
    """
    Shared client built from the current settings.
    Call `reload_client_cache()` after changing the environment.
    """
    return BigMLClient()


def reload_client_cache() -> None:
    get_client.cache_clear()  # type: ignore[attr-defined]
