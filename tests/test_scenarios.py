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

from rbac_smoke.constants import NS_DEFAULT
from rbac_smoke.polling import PollTimeoutError
from rbac_smoke.scenarios import SmokeRunner
from tests.conftest import DENIED_LINE, READY_LINE


@pytest.fixture
def runner(config, clients, results, sleep) -> SmokeRunner:
    return SmokeRunner(config=config, clients=clients, results=results, sleep=sleep)


def _step_order(clients) -> Mock:
    parent = Mock()
    parent.attach_mock(clients.functions.delete, "delete_function")
    parent.attach_mock(clients.cluster.delete_all, "delete_all")
    parent.attach_mock(clients.manifests.delete, "delete_manifest")
    parent.attach_mock(clients.cluster.delete_namespace, "delete_namespace")
    parent.attach_mock(clients.cluster.create_namespace, "create_namespace")
    parent.attach_mock(clients.manifests.update, "update_manifest")
    parent.attach_mock(clients.functions.deploy, "deploy")
    parent.attach_mock(clients.functions.call, "call")
    return parent


# ============================================================================
# Without RBAC roles
# ============================================================================

def test_without_rbac_passes_on_denial_and_failed_call(runner, clients, results) -> None:
    clients.cluster.logs.return_value = f"{DENIED_LINE}\n"
    clients.functions.call.return_value = 1

    runner.run_without_rbac()

    assert results.passed == 2
    assert results.failed == 0


def test_without_rbac_runs_steps_in_order_with_plain_manifest(runner, clients, config) -> None:
    clients.functions.call.return_value = 1
    parent = _step_order(clients)

    runner.run_without_rbac()

    names = [name for name, _, _ in parent.mock_calls]
    assert names == [
        "delete_function",
        "delete_all",
        "delete_manifest",
        "delete_namespace",
        "create_namespace",
        "update_manifest",
        "deploy",
        "call",
    ]
    clients.manifests.delete.assert_called_once_with(config.manifest)
    clients.manifests.update.assert_called_once_with(config.manifest)
    clients.cluster.delete_all.assert_called_once_with("function=get-python")
    clients.cluster.create_namespace.assert_called_once_with("kubeless")


def test_without_rbac_waits_for_controller_and_settles(runner, clients, sleep) -> None:
    clients.functions.call.return_value = 1

    runner.run_without_rbac()

    clients.cluster.pod_phases.assert_any_call("kubeless", "kubeless=controller")
    assert call(10.0) in sleep.call_args_list


def test_without_rbac_inspects_tail_of_controller_logs(runner, clients) -> None:
    clients.functions.call.return_value = 1

    runner.run_without_rbac()

    clients.cluster.logs.assert_called_with("kubeless", "kubeless=controller", 10)


def test_without_rbac_fails_when_call_succeeds(runner, clients, results) -> None:
    clients.functions.call.return_value = 0

    runner.run_without_rbac()

    assert results.passed == 1
    assert results.failed == 1


def test_without_rbac_fails_when_no_denial_is_logged(runner, clients, results) -> None:
    clients.cluster.logs.return_value = f"{READY_LINE}\n"
    clients.functions.call.return_value = 1

    runner.run_without_rbac()

    assert clients.cluster.logs.call_count == 3
    assert results.failed == 1
    assert results.passed == 1


def test_without_rbac_denial_must_be_on_a_single_line(runner, clients, results) -> None:
    clients.cluster.logs.return_value = "User system:anonymous\nwas refused: cannot list\n"
    clients.functions.call.return_value = 1

    runner.run_without_rbac()

    assert results.failed == 1


def test_without_rbac_waits_for_namespace_to_disappear(runner, clients, results) -> None:
    clients.cluster.namespace_exists.side_effect = [True, True, False]
    clients.functions.call.return_value = 1

    runner.run_without_rbac()

    assert clients.cluster.namespace_exists.call_count == 3
    assert results.passed == 2


# ============================================================================
# With RBAC roles
# ============================================================================

def test_with_rbac_passes_when_ready_and_call_succeeds(runner, clients, results) -> None:
    clients.cluster.logs.return_value = f"{READY_LINE}\n"
    clients.functions.call.return_value = 0

    runner.run_with_rbac()

    assert results.passed == 2
    assert results.failed == 0


def test_with_rbac_uses_rbac_manifest_for_delete_and_apply(runner, clients, config) -> None:
    runner.run_with_rbac()

    clients.manifests.delete.assert_called_once_with(config.rbac_manifest)
    clients.manifests.update.assert_called_once_with(config.rbac_manifest)


def test_with_rbac_waits_for_function_pod_before_calling(runner, clients) -> None:
    parent = Mock()
    parent.attach_mock(clients.cluster.pod_phases, "pod_phases")
    parent.attach_mock(clients.functions.call, "call")

    runner.run_with_rbac()

    assert parent.mock_calls[-2:] == [
        call.pod_phases(NS_DEFAULT, "function=get-python"),
        call.call(runner.function),
    ]


def test_with_rbac_still_calls_when_function_pod_never_runs(runner, clients, results, config) -> None:
    def _phases(namespace: str, selector: str) -> list[str]:
        return ["Running"] if selector == config.controller_selector else ["Pending"]

    clients.cluster.pod_phases.side_effect = _phases
    clients.functions.call.return_value = 1

    runner.run_with_rbac()

    clients.functions.call.assert_called_once()
    assert results.passed == 1
    assert results.failed == 1


def test_with_rbac_does_not_accept_denial_as_readiness(runner, clients, results) -> None:
    clients.cluster.logs.return_value = f"{DENIED_LINE}\n"

    runner.run_with_rbac()

    assert results.failed == 1


# ============================================================================
# Setup failures
# ============================================================================

def test_namespace_stuck_terminating_fails_scenario_setup(runner, clients, results, report) -> None:
    clients.cluster.namespace_exists.return_value = True

    runner.run_without_rbac()

    assert results.failed == 1
    assert results.passed == 0
    assert "controller setup" in report.getvalue()
    clients.functions.deploy.assert_not_called()
    clients.functions.call.assert_not_called()


def test_controller_never_running_fails_scenario_setup(runner, clients, results) -> None:
    clients.cluster.pod_phases.return_value = ["Pending"]

    runner.run_with_rbac()

    assert results.failed == 1
    clients.functions.deploy.assert_not_called()


def test_rejected_manifest_fails_scenario_setup(runner, clients, results) -> None:
    clients.manifests.update.side_effect = RuntimeError("Failed to apply kubeless.yaml")

    runner.run_without_rbac()

    assert results.failed == 1
    clients.functions.deploy.assert_not_called()


def test_wait_for_pods_running_raises_poll_timeout(runner, clients) -> None:
    clients.cluster.pod_phases.return_value = []

    with pytest.raises(PollTimeoutError, match="kubeless=controller"):
        runner.wait_for_pods_running("kubeless", "kubeless=controller")


def test_wait_for_log_line_reports_match(runner, clients) -> None:
    clients.cluster.logs.side_effect = ["", "", f"{READY_LINE}\n"]

    assert runner.wait_for_log_line("controller synced and ready") is True


def test_wait_for_log_line_reports_timeout(runner, clients) -> None:
    clients.cluster.logs.return_value = ""

    assert runner.wait_for_log_line("controller synced and ready") is False
