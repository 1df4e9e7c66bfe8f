# Copyright 2026 Firefly Software Solutions Inc.
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
"""Demo endpoints that exercise the CORS filter with simple and preflighted calls."""

from corsgate.demo.application import build_application, create_demo_app
from corsgate.demo.controllers import api_routes, banking_routes, demo_routes
from corsgate.demo.models import ApiResponse, TransferRequest

__all__ = [
    "ApiResponse",
    "TransferRequest",
    "api_routes",
    "banking_routes",
    "build_application",
    "create_demo_app",
    "demo_routes",
]
