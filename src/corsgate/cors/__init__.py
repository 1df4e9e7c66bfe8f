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
"""corsgate CORS — policy model, evaluator, and path-scoped policy source."""

from corsgate.cors.decision import CorsDecision, Verdict
from corsgate.cors.evaluator import CorsEvaluator, classify, evaluate
from corsgate.cors.loader import load_policy_source
from corsgate.cors.policy import WILDCARD, CorsPolicy
from corsgate.cors.request import IncomingRequest, RequestKind
from corsgate.cors.source import PathPattern, PolicySource

__all__ = [
    "WILDCARD",
    "CorsDecision",
    "CorsEvaluator",
    "CorsPolicy",
    "IncomingRequest",
    "PathPattern",
    "PolicySource",
    "RequestKind",
    "Verdict",
    "classify",
    "evaluate",
    "load_policy_source",
]
