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


"""Utility functions for running CLI tools and command checks."""

from __future__ import annotations

import subprocess

import sh

from rbac_smoke import logger
from rbac_smoke.constants import DEFAULT_COMMAND_TIMEOUT_SECONDS


def require_command(cmd: str) -> None:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Raises:
        RuntimeError: If the command is not found.
    """
    if not sh.which(cmd):
        raise RuntimeError(f"Required command '{cmd}' not found. Please install it first.")


def run_tool(tool: str, args: list[str], timeout: int = DEFAULT_COMMAND_TIMEOUT_SECONDS) -> tuple[int, str, str]:
    """Run a CLI tool via subprocess and return (returncode, stdout, stderr).

    Uses subprocess instead of sh where the caller needs the exit status
    itself, or stdout and stderr kept apart for output parsing.

    Args:
        tool: Executable name (e.g. ``kubectl``).
        args: Arguments passed to the tool.
        timeout: Maximum seconds to wait for the command to complete.

    Returns:
        Tuple of (returncode, stdout, stderr). The return code is -1 when the
        tool could not be started or did not finish within *timeout*.
    """
    logger.debug("Running %s %s", tool, " ".join(args))
    try:
        result = subprocess.run(
            [tool, *args],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return result.returncode, result.stdout, result.stderr
    except (subprocess.SubprocessError, OSError) as exc:
        return -1, "", str(exc)


def error_output(err: sh.ErrorReturnCode) -> str:
    """Decode the stderr of a failed sh command for diagnostics.

    Args:
        err: The exception raised by sh for a non-zero exit.

    Returns:
        Stripped stderr text, or stdout when stderr is empty.
    """
    stderr = err.stderr.decode(errors="replace").strip()
    if stderr:
        return stderr
    return err.stdout.decode(errors="replace").strip()
