#   Copyright 2026 UCP Authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Server information and health routes."""

from typing import Any

from acp_sandbox import config
from acp_sandbox import dependencies
from acp_sandbox import store
from acp_sandbox.clock import Clock
from fastapi import APIRouter
from fastapi import Depends
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/", include_in_schema=False)
async def index() -> RedirectResponse:
  """Sends browsers to the interactive API docs."""
  return RedirectResponse(url="/docs")


@router.get(
    "/api",
    response_model=dict[str, Any],
    summary="Server Info",
)
async def get_server_info() -> dict[str, Any]:
  """Returns the server description and endpoint map."""
  return config.get_server_info()


@router.get(
    "/health",
    response_model=dict[str, Any],
    summary="Health Check",
)
async def get_health(
    clock: Clock = Depends(dependencies.get_clock),
    stores: store.StoreManager = Depends(dependencies.get_store_manager),
) -> dict[str, Any]:
  """Reports liveness and the number of live records."""
  return {
      "status": "healthy",
      "timestamp": clock.now().isoformat(),
      "sessions": await stores.checkout_sessions.size(),
      "orders": await stores.orders.size(),
      "tokens": await stores.payment_tokens.size(),
  }
