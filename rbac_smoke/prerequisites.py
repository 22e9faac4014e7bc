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


"""Pre-flight checks run before the cluster is touched."""

from __future__ import annotations

from rich.panel import Panel

from rbac_smoke import console
from rbac_smoke.clients import SmokeClients
from rbac_smoke.config import SmokeConfig
from rbac_smoke.constants import CLUSTER_STATUS_RUNNING, RBAC_API_GROUP, REQUIRED_TOOLS
from rbac_smoke.utils import require_command


class PrerequisiteError(RuntimeError):
    """The environment cannot run the smoke test; nothing was changed."""


def check_prerequisites(config: SmokeConfig, clients: SmokeClients) -> None:
    """Verify tools, cluster state, and RBAC support.

    Args:
        config: Smoke test configuration with the test context.
        clients: Collaborators used to query the cluster.

    Raises:
        PrerequisiteError: If a tool is missing, the cluster is not running,
            or the API server does not serve the RBAC API group.
    """
    console.print(Panel.fit("Checking prerequisites", style="bold blue"))
    for cmd in REQUIRED_TOOLS:
        try:
            require_command(cmd)
        except RuntimeError as err:
            raise PrerequisiteError(str(err)) from err
    console.print("[green]\u2705 All required tools are available[/green]")

    status = clients.runtime.status()
    if status != CLUSTER_STATUS_RUNNING:
        raise PrerequisiteError(f"Cluster is not running (minikube reports '{status or 'unknown'}')")
    console.print("[green]\u2705 Cluster is running[/green]")

    try:
        versions = clients.cluster.api_versions(config.context)
    except RuntimeError as err:
        raise PrerequisiteError(str(err)) from err
    if not any(version.split("/")[0] == RBAC_API_GROUP for version in versions):
        raise PrerequisiteError(
            f"RBAC is not enabled in context '{config.context}' ({RBAC_API_GROUP} not served)"
        )
    console.print("[green]\u2705 RBAC is enabled[/green]")
