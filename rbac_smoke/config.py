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


"""Configuration classes and config models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, FilePath
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.panel import Panel

from rbac_smoke import console
from rbac_smoke.constants import (
    DEFAULT_CONTEXT,
    DEFAULT_CONTROLLER_NAMESPACE,
    DEFAULT_CONTROLLER_SELECTOR,
    DEFAULT_LOG_TAIL,
    DEFAULT_MANIFEST,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
    DEFAULT_RBAC_MANIFEST,
    DEFAULT_SETTLE_SECONDS,
    FUNCTION_LABEL,
    PACKAGE_DIR,
    default_value,
)


# ============================================================================
# Function under test
# ============================================================================

@dataclass(frozen=True)
class FunctionSpec:
    """The function deployed and invoked by both scenarios.

    Attributes:
        name: Function resource name.
        runtime: kubeless runtime identifier (e.g. ``python2.7``).
        handler: ``<module>.<function>`` entry point.
        source: Path to the function source file.
        data: JSON payload sent on invocation.
    """

    name: str
    runtime: str
    handler: str
    source: Path
    data: str

    @property
    def selector(self) -> str:
        """Label selector matching the function's pods."""
        return f"{FUNCTION_LABEL}={self.name}"


# ============================================================================
# Configuration classes
# ============================================================================

class SmokeConfig(BaseSettings):
    """Smoke test configuration, auto-loaded from RBAC_SMOKE_* env vars.

    Attributes:
        context: kubectl context of the test cluster.
        controller_namespace: Namespace the controller is deployed into.
        controller_selector: Label selector matching the controller pod.
        manifest: Controller manifest without the RBAC bindings.
        rbac_manifest: Controller manifest including the RBAC bindings.
        poll_interval: Seconds between two checks of a polled condition.
        poll_timeout: Seconds before a polled condition is given up on.
        poll_max_attempts: Optional cap on the checks per polled condition.
        settle_seconds: Delay after the controller pod reports Running.
        log_tail: Number of controller log lines inspected per poll.
        function_name: Name of the function under test.
        function_runtime: Runtime of the function under test.
        function_handler: Handler of the function under test.
        function_file: Source file of the function under test.
        function_data: JSON payload used when calling the function.
    """

    model_config = SettingsConfigDict(env_prefix="RBAC_SMOKE_", extra="ignore", validate_default=True)

    context: str = DEFAULT_CONTEXT
    controller_namespace: str = DEFAULT_CONTROLLER_NAMESPACE
    controller_selector: str = DEFAULT_CONTROLLER_SELECTOR
    manifest: FilePath = DEFAULT_MANIFEST
    rbac_manifest: FilePath = DEFAULT_RBAC_MANIFEST
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, gt=0)
    poll_timeout: float = Field(default=DEFAULT_POLL_TIMEOUT_SECONDS, ge=1)
    poll_max_attempts: int | None = Field(default=None, ge=1)
    settle_seconds: float = Field(default=DEFAULT_SETTLE_SECONDS, ge=0)
    log_tail: int = Field(default=DEFAULT_LOG_TAIL, ge=1)
    function_name: str = Field(default=default_value("function", "name"),
                               pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
    function_runtime: str = default_value("function", "runtime")
    function_handler: str = Field(default=default_value("function", "handler"),
                                  pattern=r"^[\w-]+\.[\w-]+$")
    function_file: FilePath = PACKAGE_DIR / default_value("function", "file")
    function_data: str = default_value("function", "data")

    def function_spec(self) -> FunctionSpec:
        """Build the FunctionSpec described by this configuration."""
        return FunctionSpec(
            name=self.function_name,
            runtime=self.function_runtime,
            handler=self.function_handler,
            source=self.function_file,
            data=self.function_data,
        )


def display_config(config: SmokeConfig) -> None:
    """Print the resolved configuration.

    Args:
        config: Resolved smoke test configuration.
    """
    console.print(Panel.fit("Configuration", style="bold blue"))
    console.print("[yellow]Cluster:[/yellow]")
    console.print(f"  context              : {config.context}")
    console.print(f"  controller_namespace : {config.controller_namespace}")
    console.print(f"  controller_selector  : {config.controller_selector}")
    console.print("[yellow]Manifests:[/yellow]")
    console.print(f"  manifest             : {config.manifest}")
    console.print(f"  rbac_manifest        : {config.rbac_manifest}")
    console.print("[yellow]Function:[/yellow]")
    console.print(f"  name                 : {config.function_name}")
    console.print(f"  runtime              : {config.function_runtime}")
    console.print(f"  handler              : {config.function_handler}")
    console.print(f"  file                 : {config.function_file}")
    console.print("[yellow]Polling:[/yellow]")
    console.print(f"  interval             : {config.poll_interval:g}s")
    console.print(f"  timeout              : {config.poll_timeout:g}s")
    console.print(f"  settle               : {config.settle_seconds:g}s")
