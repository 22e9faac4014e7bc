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

from unittest.mock import Mock, call

import pytest

from rbac_smoke.orchestrator import run
from rbac_smoke.prerequisites import PrerequisiteError


def test_full_run_passes_every_assertion(config, clients, results, sleep, tools_present) -> None:
    clients.functions.call.side_effect = [1, 0]

    exit_code = run(config, clients, results, sleep=sleep)

    assert exit_code == 0
    assert results.passed == 4
    assert results.failed == 0


def test_scenarios_run_between_context_switches(config, clients, results, sleep, tools_present) -> None:
    clients.cluster.current_context.return_value = "prod-east"
    clients.functions.call.side_effect = [1, 0]
    parent = Mock()
    parent.attach_mock(clients.cluster.use_context, "use_context")
    parent.attach_mock(clients.manifests.update, "update_manifest")

    run(config, clients, results, sleep=sleep)

    assert parent.mock_calls == [
        call.use_context("minikube"),
        call.update_manifest(config.manifest),
        call.update_manifest(config.rbac_manifest),
        call.use_context("prod-east"),
    ]


def test_exit_code_counts_failed_assertions(config, clients, results, sleep, tools_present) -> None:
    clients.functions.call.side_effect = [0, 1]

    exit_code = run(config, clients, results, sleep=sleep)

    assert exit_code == 2
    assert results.total == 4


def test_second_scenario_runs_after_first_setup_fails(config, clients, results, sleep, tools_present) -> None:
    clients.manifests.update.side_effect = [RuntimeError("Failed to apply"), None]
    clients.functions.call.return_value = 0

    exit_code = run(config, clients, results, sleep=sleep)

    assert exit_code == 1
    assert results.passed == 2
    clients.functions.call.assert_called_once()


def test_prerequisite_failure_runs_nothing(config, clients, results, sleep, monkeypatch) -> None:
    monkeypatch.setattr(
        "rbac_smoke.prerequisites.require_command",
        Mock(side_effect=RuntimeError("Required command 'kubeless' not found. Please install it first.")),
    )
    clients.cluster.current_context.return_value = "prod-east"

    with pytest.raises(PrerequisiteError):
        run(config, clients, results, sleep=sleep)

    assert results.total == 0
    clients.cluster.use_context.assert_not_called()
    clients.manifests.delete.assert_not_called()
    clients.functions.deploy.assert_not_called()
