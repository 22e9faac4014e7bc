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


from __future__ import annotations

import io
from unittest.mock import Mock

import pytest
from rich.console import Console

from rbac_smoke.clients import ClusterClient, ClusterRuntime, FunctionClient, ManifestClient, SmokeClients
from rbac_smoke.config import SmokeConfig
from rbac_smoke.results import SmokeResults

DENIED_LINE = (
    'E1019 10:00:00 controller.go:120] User "system:serviceaccount:kubeless:controller-acct" '
    'cannot list functions.kubeless.io at the cluster scope'
)
READY_LINE = "I1019 10:00:05 controller.go:88] Kubeless controller synced and ready"


@pytest.fixture
def config(tmp_path) -> SmokeConfig:
    for name in ("kubeless.yaml", "kubeless-rbac.yaml"):
        (tmp_path / name).write_text("---\n", encoding="utf-8")
    return SmokeConfig(
        context="minikube",
        manifest=tmp_path / "kubeless.yaml",
        rbac_manifest=tmp_path / "kubeless-rbac.yaml",
        poll_interval=1,
        poll_timeout=60,
        poll_max_attempts=3,
        settle_seconds=10,
    )


@pytest.fixture
def clients() -> SmokeClients:
    cluster = Mock(spec=ClusterClient)
    cluster.current_context.return_value = "minikube"
    cluster.api_versions.return_value = ["apps/v1", "rbac.authorization.k8s.io/v1", "v1"]
    cluster.namespace_exists.return_value = False
    cluster.pod_phases.return_value = ["Running"]
    cluster.logs.return_value = f"{DENIED_LINE}\n{READY_LINE}\n"

    functions = Mock(spec=FunctionClient)
    functions.call.return_value = 0

    runtime = Mock(spec=ClusterRuntime)
    runtime.status.return_value = "Running"

    return SmokeClients(
        cluster=cluster,
        manifests=Mock(spec=ManifestClient),
        functions=functions,
        runtime=runtime,
    )


@pytest.fixture
def report() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def results(report) -> SmokeResults:
    return SmokeResults(out=Console(file=report, force_terminal=False, width=200))


@pytest.fixture
def sleep() -> Mock:
    return Mock()


@pytest.fixture
def tools_present(monkeypatch) -> Mock:
    require = Mock()
    monkeypatch.setattr("rbac_smoke.prerequisites.require_command", require)
    return require
