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

"""Order routes for the ACP sandbox server."""

from typing import Any

from acp_sandbox import dependencies
from acp_sandbox.services.checkout_service import CheckoutService
from fastapi import APIRouter
from fastapi import Depends
from fastapi import Path

router = APIRouter(dependencies=[Depends(dependencies.validate_acp_headers)])


@router.get(
    "/orders/{id}",
    response_model=dict[str, Any],
    operation_id="get_order",
)
async def get_order(
    order_id: str = Path(..., alias="id"),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> dict[str, Any]:
  """Get an order by ID."""
  order = await checkout_service.get_order(order_id)
  return order.model_dump(mode="json")
