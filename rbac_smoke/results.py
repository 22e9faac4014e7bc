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


"""Pass/fail bookkeeping for the smoke test assertions."""

from __future__ import annotations

from rich.console import Console

from rbac_smoke import report_console
from rbac_smoke.constants import MAX_FAILED_EXIT_CODE


class SmokeResults:
    """Counts assertion outcomes and prints one line per assertion.

    Output goes through rich, so PASS/FAIL are bold only when stdout is an
    interactive terminal.
    """

    def __init__(self, out: Console | None = None) -> None:
        self.passed = 0
        self.failed = 0
        self._out = out or report_console

    @property
    def total(self) -> int:
        return self.passed + self.failed

    @property
    def exit_code(self) -> int:
        """Process exit status: the number of failed assertions, capped at 254."""
        return min(self.failed, MAX_FAILED_EXIT_CODE)

    def check(self, observed: int, expected: int, description: str) -> bool:
        """Compare a result code against the expected one and record the outcome.

        Args:
            observed: Result code produced by the step under test.
            expected: Result code the step must produce to pass.
            description: Human-readable name of the assertion.

        Returns:
            True if *observed* equals *expected*.
        """
        ok = observed == expected
        if ok:
            self.passed += 1
            label = "[bold green]PASS[/bold green]"
        else:
            self.failed += 1
            label = "[bold red]FAIL[/bold red]"
        self._out.print(f"{label}: {description} (observed {observed}, expected {expected})", highlight=False)
        return ok

    def summary(self) -> None:
        """Print the aggregate line for the whole run."""
        style = "green" if self.failed == 0 else "red"
        self._out.print(
            f"[bold {style}]{self.total} tests, {self.passed} passed, {self.failed} failed[/bold {style}]",
            highlight=False,
        )
