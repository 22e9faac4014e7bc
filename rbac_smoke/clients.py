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


"""Thin wrappers around kubectl, kubecfg, kubeless, and minikube.

Every collaborator the smoke test needs is reached through one of these
classes so the scenarios can be exercised against mocks. Mutating commands
go through sh and raise RuntimeError on failure; queries go through
run_tool so the exit status and output can be inspected directly.
Best-effort cleanup commands never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import sh

from rbac_smoke import logger
from rbac_smoke.config import FunctionSpec
from rbac_smoke.utils import error_output, run_tool


# ============================================================================
# kubectl
# ============================================================================

class ClusterClient:
    """kubectl operations against the active context."""

    def pod_phases(self, namespace: str, selector: str) -> list[str]:
        """Return the phase of every pod matching *selector* in *namespace*.

        Args:
            namespace: Namespace to search.
            selector: Label selector (e.g. ``kubeless=controller``).

        Returns:
            Pod phases such as ``Running`` or ``Pending``; empty when the
            query fails or no pod matches.
        """
        code, stdout, stderr = run_tool("kubectl", [
            "get", "pod",
            f"--namespace={namespace}",
            f"--selector={selector}",
            "-o", "jsonpath={.items[*].status.phase}",
        ])
        if code != 0:
            logger.debug("kubectl get pod failed: %s", stderr.strip())
            return []
        return stdout.split()

    def logs(self, namespace: str, selector: str, tail: int) -> str:
        """Return the last *tail* log lines of the pods matching *selector*."""
        code, stdout, stderr = run_tool("kubectl", [
            "logs",
            f"--tail={tail}",
            f"--namespace={namespace}",
            f"--selector={selector}",
        ])
        if code != 0:
            logger.debug("kubectl logs failed: %s", stderr.strip())
            return ""
        return stdout

    def namespace_exists(self, namespace: str) -> bool:
        code, _, _ = run_tool("kubectl", ["get", "namespace", namespace])
        return code == 0

    def delete_namespace(self, namespace: str) -> None:
        """Force-delete a namespace, ignoring a missing one."""
        try:
            sh.kubectl("delete", "namespace", namespace, "--grace-period=0", "--force")
        except sh.ErrorReturnCode as err:
            logger.debug("Namespace %s not deleted: %s", namespace, error_output(err))

    def create_namespace(self, namespace: str) -> None:
        """Create a namespace.

        Raises:
            RuntimeError: If kubectl fails to create it.
        """
        try:
            sh.kubectl("create", "namespace", namespace)
        except sh.ErrorReturnCode as err:
            raise RuntimeError(f"Failed to create namespace {namespace}: {error_output(err)}") from err

    def delete_all(self, selector: str) -> None:
        """Delete every resource matching *selector*, ignoring failures."""
        try:
            sh.kubectl("delete", "all", f"--selector={selector}")
        except sh.ErrorReturnCode as err:
            logger.debug("Resources for %s not deleted: %s", selector, error_output(err))

    def api_versions(self, context: str) -> list[str]:
        """Return the API group versions served by the cluster behind *context*.

        Raises:
            RuntimeError: If the API server cannot be queried.
        """
        code, stdout, stderr = run_tool("kubectl", ["--context", context, "api-versions"])
        if code != 0:
            raise RuntimeError(f"Failed to query API versions of context '{context}': {stderr.strip()}")
        return stdout.split()

    def current_context(self) -> str | None:
        """Return the active kubectl context, or None when none is set."""
        code, stdout, _ = run_tool("kubectl", ["config", "current-context"])
        if code != 0:
            return None
        return stdout.strip() or None

    def use_context(self, name: str) -> None:
        """Switch the active kubectl context.

        Raises:
            RuntimeError: If the context does not exist or cannot be selected.
        """
        try:
            sh.kubectl("config", "use-context", name)
        except sh.ErrorReturnCode as err:
            raise RuntimeError(f"Failed to switch to context '{name}': {error_output(err)}") from err


# ============================================================================
# kubecfg
# ============================================================================

class ManifestClient:
    """kubecfg operations on the controller manifests."""

    def delete(self, manifest: Path) -> None:
        """Delete every object described by *manifest*, ignoring failures."""
        try:
            sh.kubecfg("delete", str(manifest))
        except sh.ErrorReturnCode as err:
            logger.debug("Manifest %s not deleted: %s", manifest, error_output(err))

    def update(self, manifest: Path) -> None:
        """Create or update every object described by *manifest*.

        Raises:
            RuntimeError: If kubecfg rejects the manifest.
        """
        try:
            sh.kubecfg("update", str(manifest))
        except sh.ErrorReturnCode as err:
            raise RuntimeError(f"Failed to apply {manifest}: {error_output(err)}") from err


# ============================================================================
# kubeless
# ============================================================================

class FunctionClient:
    """kubeless function operations."""

    def deploy(self, spec: FunctionSpec) -> None:
        """Submit the function; a rejection by kubeless is logged, not raised."""
        code, _, stderr = run_tool("kubeless", [
            "function", "deploy", spec.name,
            "--runtime", spec.runtime,
            "--handler", spec.handler,
            "--from-file", str(spec.source),
            "--trigger-http",
        ])
        if code != 0:
            logger.warning("kubeless rejected function %s: %s", spec.name, stderr.strip())

    def call(self, spec: FunctionSpec) -> int:
        """Invoke the function and return the exit status of the call."""
        code, stdout, stderr = run_tool("kubeless", ["function", "call", spec.name, "--data", spec.data])
        logger.debug("kubeless function call %s -> %d: %s", spec.name, code, (stdout or stderr).strip())
        return code

    def delete(self, name: str) -> None:
        """Delete the function, ignoring a missing one."""
        try:
            sh.kubeless("function", "delete", name)
        except sh.ErrorReturnCode as err:
            logger.debug("Function %s not deleted: %s", name, error_output(err))


# ============================================================================
# minikube
# ============================================================================

class ClusterRuntime:
    """Status of the local minikube cluster."""

    def status(self) -> str:
        """Return the host state reported by minikube (e.g. ``Running``)."""
        _, stdout, stderr = run_tool("minikube", ["status", "--format={{.Host}}"])
        return stdout.strip() or stderr.strip()


@dataclass
class SmokeClients:
    """The collaborators injected into the orchestrator."""

    cluster: ClusterClient = field(default_factory=ClusterClient)
    manifests: ManifestClient = field(default_factory=ManifestClient)
    functions: FunctionClient = field(default_factory=FunctionClient)
    runtime: ClusterRuntime = field(default_factory=ClusterRuntime)
