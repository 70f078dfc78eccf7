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

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

try:
    __version__ = version("bigml-binding")
except PackageNotFoundError:  # during dev
    __version__ = "0.0.0"

__all__ = ["BigMLClient", "Centroid", "Cluster", "PollPolicy", "Result"]


def __getattr__(name: str):
    if name == "BigMLClient":
        from .client import BigMLClient

        return BigMLClient
    if name == "Centroid":
        from .resources.centroid import Centroid

        return Centroid
    if name == "Cluster":
        from .resources.cluster import Cluster

        return Cluster
    if name == "PollPolicy":
        from .platform.poll import PollPolicy

        return PollPolicy
    if name == "Result":
        from .resources.result import Result

        return Result
    raise AttributeError(name)


if TYPE_CHECKING:
    from .client import BigMLClient
    from .platform.poll import PollPolicy
    from .resources.centroid import Centroid
    from .resources.cluster import Cluster
    from .resources.result import Result
