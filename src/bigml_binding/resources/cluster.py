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

from bigml_binding.resources.base import ResourceBinding
from bigml_binding.resources.ids import ResourceKind


class Cluster(ResourceBinding):
    """Clusters are the trained models centroids are computed from.

    Creation is out of scope here; the binding is used to check a cluster's
    readiness before asking for a centroid.
    """

    kind = ResourceKind.CLUSTER
