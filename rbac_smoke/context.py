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


"""Switching to the test context and back."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rbac_smoke import console, logger
from rbac_smoke.clients import ClusterClient
from rbac_smoke.constants import RESULT_FAILED, RESULT_OK
from rbac_smoke.prerequisites import PrerequisiteError
from rbac_smoke.results import SmokeResults


@contextmanager
def preserved_context(cluster: ClusterClient, target: str, results: SmokeResults) -> Iterator[str | None]:
    """Make *target* the active context for the duration of the block.

    Nothing is switched when *target* is already active. Otherwise the
    previous context is restored when the block exits, whether or not it
    raised. A failed restore is recorded as a failed assertion.

    Args:
        cluster: kubectl client.
        target: Context the smoke test runs against.
        results: Assertion bookkeeping that records a failed restore.

    Yields:
        The saved context name, or None when there is nothing to restore.

    Raises:
        PrerequisiteError: If switching to *target* fails.
    """
    current = cluster.current_context()
    saved = current if current != target else None
    if current != target:
        if current is None:
            console.print(f"[yellow]\u2139\ufe0f  No active context, switching to '{target}'[/yellow]")
        else:
            console.print(f"[yellow]\u2139\ufe0f  Switching context from '{current}' to '{target}'[/yellow]")
        try:
            cluster.use_context(target)
        except RuntimeError as err:
            raise PrerequisiteError(str(err)) from err

    try:
        yield saved
    finally:
        if saved is not None:
            try:
                cluster.use_context(saved)
                console.print(f"[green]\u2705 Restored context '{saved}'[/green]")
            except RuntimeError as err:
                logger.error("%s", err)
                results.check(RESULT_FAILED, RESULT_OK, f"restore kube context '{saved}'")
