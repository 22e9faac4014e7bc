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


"""Constants, defaults loading, and default_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

# -- Resolved paths --
PACKAGE_DIR = Path(__file__).resolve().parent


def load_defaults() -> dict:
    """Load tool names, log patterns, and the test function from defaults.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    defaults_file = PACKAGE_DIR / "defaults.yaml"
    with open(defaults_file) as f:
        return yaml.safe_load(f)


DEFAULTS = load_defaults()


def default_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEFAULTS dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEFAULTS
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


REQUIRED_TOOLS: list[str] = DEFAULTS["required_tools"]
RBAC_API_GROUP: str = DEFAULTS["rbac_api_group"]

# -- Log patterns --
LOG_PATTERN_DENIED: str = DEFAULTS["log_patterns"]["denied"]
LOG_PATTERN_READY: str = DEFAULTS["log_patterns"]["ready"]

# -- Exit codes --
EXIT_PREREQUISITES_FAILED = 255
MAX_FAILED_EXIT_CODE = 254

# -- Result codes --
RESULT_OK = 0
RESULT_FAILED = 1

# -- Pod states --
POD_PHASE_RUNNING = "Running"
CLUSTER_STATUS_RUNNING = "Running"

# -- Namespaces --
NS_DEFAULT = "default"

# -- Selectors --
FUNCTION_LABEL = "function"

# -- Cluster defaults --
DEFAULT_CONTEXT = "minikube"
DEFAULT_CONTROLLER_NAMESPACE = "kubeless"
DEFAULT_CONTROLLER_SELECTOR = "kubeless=controller"

# -- Manifests --
DEFAULT_MANIFEST = PACKAGE_DIR / "manifests" / "kubeless.yaml"
DEFAULT_RBAC_MANIFEST = PACKAGE_DIR / "manifests" / "kubeless-rbac.yaml"

# -- Timing defaults --
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_POLL_TIMEOUT_SECONDS = 300.0
DEFAULT_SETTLE_SECONDS = 10.0
DEFAULT_LOG_TAIL = 10
DEFAULT_COMMAND_TIMEOUT_SECONDS = 60
