# /*
# Copyright 2026 The Grove Authors.
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
# */


"""Command line entry point for the RBAC smoke test."""

from __future__ import annotations

import logging
import sys

import typer
from pydantic import ValidationError

from rbac_smoke import console
from rbac_smoke.config import SmokeConfig, display_config
from rbac_smoke.constants import EXIT_PREREQUISITES_FAILED
from rbac_smoke.orchestrator import run
from rbac_smoke.prerequisites import PrerequisiteError

app = typer.Typer(help="RBAC smoke test for the kubeless function controller.")


@app.command()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every command that is run"),
) -> None:
    """Check that the controller needs its RBAC roles to deploy and call functions.

    Runs the scenario without RBAC roles, then the one with them, against the
    context configured by RBAC_SMOKE_CONTEXT (default: minikube). The exit
    status is the number of failed assertions, or 255 when the environment
    does not meet the prerequisites.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = SmokeConfig()
    except ValidationError as e:
        console.print(f"[red]\u274c Invalid configuration: {e}[/red]")
        sys.exit(EXIT_PREREQUISITES_FAILED)

    display_config(config)

    try:
        exit_code = run(config)
    except PrerequisiteError as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(EXIT_PREREQUISITES_FAILED)
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)
    sys.exit(exit_code)
