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

import pytest

from bigml_binding.config.settings import Settings

CLUSTER_ID = "cluster/" + "a" * 24
CENTROID_ID = "centroid/5143a51a37203f2cf7000972"


class FakeTransport:
    """Records every call and answers from canned envelopes.

    `responses` maps a method name to either a value returned on every call,
    an exception raised on every call, or a list consumed one item per call.
    """

    def __init__(self, **responses):
        self.calls = []
        self.responses = responses

    def _answer(self, method, *args):
        self.calls.append((method, *args))
        answer = self.responses.get(method, {})
        if isinstance(answer, list):
            answer = answer.pop(0) if len(answer) > 1 else answer[0]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def calls_to(self, method):
        return [c for c in self.calls if c[0] == method]

    def create_resource(self, path, body):
        return self._answer("create_resource", path, body)

    def get_resource(self, path):
        return self._answer("get_resource", path)

    def list_resources(self, path, query=None):
        return self._answer("list_resources", path, query)

    def update_resource(self, path, body):
        return self._answer("update_resource", path, body)

    def delete_resource(self, path):
        return self._answer("delete_resource", path)


class FakeSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture(autouse=True)
def bigml_env(monkeypatch):
    monkeypatch.setenv("BIGML_USERNAME", "alice")
    monkeypatch.setenv("BIGML_API_KEY", "s3cr3t")
    for var in (
        "BIGML_DEV_MODE",
        "BIGML_WAIT_INTERVAL_MS",
        "BIGML_MAX_RETRIES",
        "BIGML_POLL_BACKOFF",
        "BIGML_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def clear_caches_between_tests():
    from bigml_binding.client import reload_client_cache
    from bigml_binding.config.settings import reload_settings_cache

    reload_settings_cache()
    reload_client_cache()
    yield
    reload_settings_cache()
    reload_client_cache()


@pytest.fixture
def settings():
    return Settings(_env_file=None, username="alice", api_key="s3cr3t")


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def cluster_id():
    return CLUSTER_ID


@pytest.fixture
def centroid_id():
    return CENTROID_ID
