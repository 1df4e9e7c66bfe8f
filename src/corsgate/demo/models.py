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
"""Request and response payloads of the demo API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """``{"status": ..., "message": ...}`` envelope returned by every demo endpoint."""

    status: str
    message: str


class TransferRequest(BaseModel):
    """Body of ``POST /api/banking/transfer``; accepts ``toAccount`` or ``to_account``."""

    model_config = ConfigDict(populate_by_name=True)

    amount: int
    to_account: str = Field(alias="toAccount")
