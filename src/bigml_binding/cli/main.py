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
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from typing_extensions import Annotated

from ..client import get_client
from ..helpers.logger import setup_logger
from ..resources.result import Result
from ..utils.version import get_version

app = typer.Typer(name="bigml-centroid CLI", no_args_is_help=True)

console = Console()
err_console = Console(stderr=True)
logger = setup_logger("bigml_binding.cli", level=None, console=console)


def _parse_json_option(value: Optional[str], option: str) -> Optional[dict[str, Any]]:
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"not valid JSON: {e}", param_hint=option)
    if not isinstance(parsed, dict):
        raise typer.BadParameter("expected a JSON object", param_hint=option)
    return parsed


def _emit(result: Result) -> None:
    if not result:
        status = f" (HTTP {result.status_code})" if result.status_code else ""
        kind = result.error.value  # type: ignore[union-attr]
        err_console.print(f"[red1]Error[/red1] ({kind}){status}: {escape(result.message or '')}")
        raise typer.Exit(1)
    console.print_json(data=result.value or {})


@app.command("version", short_help="Show the version of the bigml-centroid CLI")
def version(short: bool = False):
    v = get_version()
    print(v if short else f"bigml-centroid CLI Version: {v}")
    raise typer.Exit()


@app.command("create", short_help="Create a centroid from a cluster and an input point")
def create(
    cluster: Annotated[str, typer.Argument(help="Cluster id (cluster/<24 chars>)")],
    input_data: Annotated[
        str,
        typer.Option("--input", "-i", help='Input point as a JSON object, e.g. \'{"age": 30}\''),
    ],
    args: Annotated[
        Optional[str],
        typer.Option("--args", "-a", help="Extra creation parameters as a JSON object"),
    ] = None,
    wait_ms: Annotated[
        Optional[int],
        typer.Option("--wait-ms", help="Milliseconds between cluster readiness checks (0 skips)"),
    ] = None,
    retries: Annotated[
        Optional[int],
        typer.Option("--retries", "-r", help="Maximum number of cluster readiness checks"),
    ] = None,
):
    """
    Create a centroid, waiting (best effort) for the cluster to be ready first.
    """
    point = _parse_json_option(input_data, "--input")
    extra = _parse_json_option(args, "--args")
    _emit(get_client().centroids.create(cluster, point, extra, wait_ms, retries))


@app.command("get", short_help="Retrieve a centroid")
def get(centroid: Annotated[str, typer.Argument(help="Centroid id")]):
    _emit(get_client().centroids.get(centroid))


@app.command("ready", short_help="Check whether a centroid is FINISHED")
def ready(centroid: Annotated[str, typer.Argument(help="Centroid id")]):
    """
    Print `true` and exit 0 when the centroid is ready, `false` and exit 2 otherwise.
    """
    is_ready = get_client().centroids.is_ready(centroid)
    console.print("true" if is_ready else "false")
    raise typer.Exit(0 if is_ready else 2)


@app.command("list", short_help="List your centroids")
def list_centroids(
    query: Annotated[
        Optional[str],
        typer.Option("--query", "-q", help='Filters, e.g. "limit=5;offset=0"'),
    ] = None,
):
    _emit(get_client().centroids.list(query))


@app.command("update", short_help="Update a centroid")
def update(
    centroid: Annotated[str, typer.Argument(help="Centroid id")],
    changes: Annotated[
        str,
        typer.Option("--changes", "-c", help='Changes as a JSON object, e.g. \'{"name": "x"}\''),
    ],
):
    _emit(get_client().centroids.update(centroid, _parse_json_option(changes, "--changes")))


@app.command("delete", short_help="Delete a centroid")
def delete(centroid: Annotated[str, typer.Argument(help="Centroid id")]):
    _emit(get_client().centroids.delete(centroid))
    logger.info(f"Centroid [cyan]{centroid}[/cyan] deleted")


def main():
    app()


if __name__ == "__main__":
    main()
