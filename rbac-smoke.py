#!/usr/bin/env python3
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


"""
rbac-smoke.py - RBAC smoke test for the kubeless function controller.

Runs two scenarios against a minikube cluster with RBAC enabled:
  1. Without the controller's RBAC roles, deploying and calling a function
     must fail and the controller must log an authorization denial.
  2. With the RBAC roles bound, the same function must deploy and answer.

The active kubectl context is switched to the test context for the run and
restored afterwards.

Environment Variables:
    All settings can be overridden via RBAC_SMOKE_* environment variables:
    - RBAC_SMOKE_CONTEXT (default: minikube)
    - RBAC_SMOKE_CONTROLLER_NAMESPACE (default: kubeless)
    - RBAC_SMOKE_POLL_TIMEOUT (default: 300 seconds)
    - RBAC_SMOKE_SETTLE_SECONDS (default: 10)
    - And more (see SmokeConfig for the full list)

Exit status:
    Number of failed assertions (0 on success), 255 if prerequisites are not met.

Examples:
    # Run against minikube
    ./rbac-smoke.py

    # Give slow clusters more time
    RBAC_SMOKE_POLL_TIMEOUT=900 ./rbac-smoke.py --verbose
"""

from __future__ import annotations

from rbac_smoke.cli import app

if __name__ == "__main__":
    app()
