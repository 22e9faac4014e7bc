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


"""The two RBAC scenarios and the steps they share."""

from __future__ import annotations

import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rich.panel import Panel

from rbac_smoke import console, logger
from rbac_smoke.clients import SmokeClients
from rbac_smoke.config import FunctionSpec, SmokeConfig
from rbac_smoke.constants import (
    LOG_PATTERN_DENIED,
    LOG_PATTERN_READY,
    NS_DEFAULT,
    POD_PHASE_RUNNING,
    RESULT_FAILED,
    RESULT_OK,
)
from rbac_smoke.polling import PollTimeoutError, wait_until
from rbac_smoke.results import SmokeResults


@dataclass
class SmokeRunner:
    """State shared by every step of a smoke test run.

    Attributes:
        config: Resolved smoke test configuration.
        clients: Injected kubectl/kubecfg/kubeless/minikube collaborators.
        results: Assertion bookkeeping.
        sleep: Sleep function used for polling and the settle delay.
    """

    config: SmokeConfig
    clients: SmokeClients
    results: SmokeResults
    sleep: Callable[[float], None] = time.sleep

    @property
    def function(self) -> FunctionSpec:
        return self.config.function_spec()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _wait(self, condition: Callable[[], bool], description: str) -> None:
        wait_until(
            condition,
            description,
            interval=self.config.poll_interval,
            timeout=self.config.poll_timeout,
            max_attempts=self.config.poll_max_attempts,
            sleep=self.sleep,
        )

    def delete_function(self) -> None:
        """Remove the function and anything labelled with it, if present."""
        spec = self.function
        console.print(f"[yellow]\u2139\ufe0f  Removing function '{spec.name}' if present...[/yellow]")
        self.clients.functions.delete(spec.name)
        self.clients.cluster.delete_all(spec.selector)

    def reset_controller(self, manifest: Path) -> None:
        """Tear down the controller and reapply it from *manifest*.

        Args:
            manifest: Controller manifest used for both the delete and the
                re-apply.

        Raises:
            PollTimeoutError: If the namespace does not go away in time.
            RuntimeError: If the namespace or the manifest cannot be applied.
        """
        namespace = self.config.controller_namespace
        cluster = self.clients.cluster
        console.print(f"[yellow]\u2139\ufe0f  Reapplying controller from {manifest.name}...[/yellow]")
        self.clients.manifests.delete(manifest)
        cluster.delete_namespace(namespace)
        self._wait(lambda: not cluster.namespace_exists(namespace), f"namespace {namespace} to be deleted")
        cluster.create_namespace(namespace)
        self.clients.manifests.update(manifest)

    def wait_for_pods_running(self, namespace: str, selector: str) -> None:
        """Block until a pod matching *selector* is Running.

        Raises:
            PollTimeoutError: If no matching pod runs within the poll timeout.
        """
        self._wait(
            lambda: POD_PHASE_RUNNING in self.clients.cluster.pod_phases(namespace, selector),
            f"pod {selector} in {namespace} to be {POD_PHASE_RUNNING}",
        )
        console.print(f"[green]\u2705 Pod {selector} is {POD_PHASE_RUNNING}[/green]")

    def wait_for_controller(self) -> None:
        """Wait for the controller pod, then give it time to start watching."""
        self.wait_for_pods_running(self.config.controller_namespace, self.config.controller_selector)
        self.sleep(self.config.settle_seconds)

    def wait_for_log_line(self, pattern: str) -> bool:
        """Wait until the controller logs contain a line matching *pattern*.

        Returns:
            True if the line appeared before the poll timeout.
        """
        regex = re.compile(pattern)
        cluster = self.clients.cluster
        try:
            self._wait(
                lambda: regex.search(cluster.logs(
                    self.config.controller_namespace,
                    self.config.controller_selector,
                    self.config.log_tail,
                )) is not None,
                f"controller log line matching '{pattern}'",
            )
        except PollTimeoutError as err:
            logger.warning("%s", err)
            return False
        return True

    def deploy_function(self) -> None:
        spec = self.function
        console.print(f"[yellow]\u2139\ufe0f  Deploying function '{spec.name}' ({spec.runtime})...[/yellow]")
        self.clients.functions.deploy(spec)

    def _prepare(self, title: str, manifest: Path) -> bool:
        """Run the shared setup steps; a failure is recorded as one assertion."""
        try:
            self.delete_function()
            self.reset_controller(manifest)
            self.wait_for_controller()
        except RuntimeError as err:
            logger.error("%s: %s", title, err)
            self.results.check(RESULT_FAILED, RESULT_OK, f"{title}: controller setup")
            return False
        return True

    # ------------------------------------------------------------------
    # Scenarios
    # ------------------------------------------------------------------

    def run_without_rbac(self) -> None:
        """Deploy and call must fail when the controller has no RBAC roles."""
        title = "Deploy/call without RBAC roles"
        console.print(Panel.fit(title, style="bold blue"))
        if not self._prepare(title, self.config.manifest):
            return

        self.deploy_function()
        found = self.wait_for_log_line(LOG_PATTERN_DENIED)
        self.results.check(RESULT_OK if found else RESULT_FAILED, RESULT_OK,
                           "controller logs an authorization denial")
        self.results.check(self.clients.functions.call(self.function), RESULT_FAILED,
                           "function call fails without RBAC roles")

    def run_with_rbac(self) -> None:
        """Deploy and call must succeed once the RBAC roles are bound."""
        title = "Deploy/call with RBAC roles"
        console.print(Panel.fit(title, style="bold blue"))
        if not self._prepare(title, self.config.rbac_manifest):
            return

        self.deploy_function()
        found = self.wait_for_log_line(LOG_PATTERN_READY)
        self.results.check(RESULT_OK if found else RESULT_FAILED, RESULT_OK,
                           "controller reports synced and ready")
        try:
            self.wait_for_pods_running(NS_DEFAULT, self.function.selector)
        except PollTimeoutError as err:
            logger.warning("%s", err)
        self.results.check(self.clients.functions.call(self.function), RESULT_OK,
                           "function call succeeds with RBAC roles")
