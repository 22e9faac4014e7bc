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


"""Orchestration of a full smoke test run."""

from __future__ import annotations

import time
from collections.abc import Callable

from rbac_smoke.clients import SmokeClients
from rbac_smoke.config import SmokeConfig
from rbac_smoke.context import preserved_context
from rbac_smoke.prerequisites import check_prerequisites
from rbac_smoke.results import SmokeResults
from rbac_smoke.scenarios import SmokeRunner


def run(
    config: SmokeConfig,
    clients: SmokeClients | None = None,
    results: SmokeResults | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Run both RBAC scenarios against the test cluster.

    Args:
        config: Resolved smoke test configuration.
        clients: Collaborators to use, or None for the real CLIs.
        results: Assertion bookkeeping, or None for a fresh one.
        sleep: Sleep function used for polling and settle delays.

    Returns:
        The process exit status: the number of failed assertions.

    Raises:
        PrerequisiteError: If the environment cannot run the test. No
            assertion has been recorded in that case.
    """
    if clients is None:
        clients = SmokeClients()
    if results is None:
        results = SmokeResults()

    check_prerequisites(config, clients)

    runner = SmokeRunner(config=config, clients=clients, results=results, sleep=sleep)
    with preserved_context(clients.cluster, config.context, results):
        runner.run_without_rbac()
        runner.run_with_rbac()

    results.summary()
    return results.exit_code
