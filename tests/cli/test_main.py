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

import json
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

from bigml_binding.cli.main import app
from bigml_binding.client import BigMLClient
from bigml_binding.exceptions import ResourceRequestError
from bigml_binding.resources.result import Result

CLI_MODPATH = "bigml_binding.cli.main"

runner = CliRunner()


@pytest.fixture
def fake_client(monkeypatch, make_transport, settings, fake_sleep):
    def _install(**responses):
        transport = make_transport(**responses)
        client = BigMLClient(settings=settings, transport=transport, sleep=fake_sleep)
        monkeypatch.setattr(f"{CLI_MODPATH}.get_client", lambda: client)
        return transport

    return _install


def test_cli_version(monkeypatch):
    monkeypatch.setattr(f"{CLI_MODPATH}.get_version", lambda: "1.2.3")

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "bigml-centroid CLI Version: 1.2.3" in result.stdout


def test_cli_version_short(monkeypatch):
    monkeypatch.setattr(f"{CLI_MODPATH}.get_version", lambda: "1.2.3")

    result = runner.invoke(app, ["version", "--short"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "1.2.3"


def test_cli_create_prints_envelope(fake_client, cluster_id):
    transport = fake_client(create_resource={"resource": "centroid/" + "f" * 24})

    result = runner.invoke(
        app,
        ["create", cluster_id, "--input", '{"age": 30}', "--args", '{"name": "c"}', "--wait-ms", "0"],
    )

    assert result.exit_code == 0, result.output
    assert "centroid/" + "f" * 24 in result.stdout
    assert transport.calls == [
        ("create_resource", "centroid", {"name": "c", "cluster": cluster_id, "input_data": {"age": 30}})
    ]


def test_cli_create_hands_parsed_args_to_binding(monkeypatch, cluster_id):
    seen = []

    class _Centroids:
        def create(self, *args):
            seen.append(args)
            return Result.success({"resource": "centroid/" + "f" * 24})

    monkeypatch.setattr(f"{CLI_MODPATH}.get_client", lambda: SimpleNamespace(centroids=_Centroids()))

    result = runner.invoke(
        app, ["create", cluster_id, "--input", "{}", "--args", '{"name": "c"}', "--wait-ms", "0"]
    )

    assert result.exit_code == 0, result.output
    assert seen == [(cluster_id, {}, {"name": "c"}, 0, None)]


def test_cli_create_bad_input_json_is_usage_error(fake_client, cluster_id):
    transport = fake_client()

    result = runner.invoke(app, ["create", cluster_id, "--input", "{nope"])

    assert result.exit_code == 2
    assert transport.calls == []


def test_cli_create_wrong_cluster_exits_1(fake_client):
    transport = fake_client()

    result = runner.invoke(app, ["create", "cluster/123", "--input", "{}"])

    assert result.exit_code == 1
    assert transport.calls == []


def test_cli_get_remote_error_exits_1(fake_client, centroid_id):
    fake_client(get_resource=ResourceRequestError(404, "Not found"))

    result = runner.invoke(app, ["get", centroid_id])

    assert result.exit_code == 1
    assert "Not found" in result.output


@pytest.mark.parametrize("code, exit_code, text", [(5, 0, "true"), (3, 2, "false")])
def test_cli_ready(fake_client, centroid_id, code, exit_code, text):
    fake_client(get_resource={"resource": centroid_id, "status": {"code": code}})

    result = runner.invoke(app, ["ready", centroid_id])

    assert result.exit_code == exit_code
    assert result.stdout.strip() == text


def test_cli_list_passes_query(fake_client):
    transport = fake_client(list_resources={"meta": {"total_count": 0}, "objects": []})

    result = runner.invoke(app, ["list", "--query", "limit=2"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"meta": {"total_count": 0}, "objects": []}
    assert transport.calls == [("list_resources", "centroid", "limit=2")]


def test_cli_update_and_delete(fake_client, centroid_id):
    transport = fake_client(update_resource={"resource": centroid_id}, delete_resource={})

    updated = runner.invoke(app, ["update", centroid_id, "--changes", '{"name": "n"}'])
    deleted = runner.invoke(app, ["delete", centroid_id])

    assert updated.exit_code == 0, updated.output
    assert deleted.exit_code == 0, deleted.output
    assert transport.calls == [
        ("update_resource", centroid_id, {"name": "n"}),
        ("delete_resource", centroid_id),
    ]
