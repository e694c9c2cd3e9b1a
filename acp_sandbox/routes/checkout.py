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

"""Checkout session routes for the ACP sandbox server."""

from typing import Any

from acp_sandbox import dependencies
from acp_sandbox.models import CheckoutSessionCompleteRequest
from acp_sandbox.models import CheckoutSessionCreateRequest
from acp_sandbox.models import CheckoutSessionUpdateRequest
from acp_sandbox.services.checkout_service import CheckoutService
from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends
from fastapi import Path

router = APIRouter(
    prefix="/checkout_sessions",
    dependencies=[Depends(dependencies.validate_acp_headers)],
)


@router.post(
    "",
    response_model=dict[str, Any],
    status_code=201,
    operation_id="create_checkout_session",
    summary="Create Checkout Session",
)
async def create_checkout(
    checkout_req: CheckoutSessionCreateRequest = Body(...),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> dict[str, Any]:
  """Create a checkout session."""
  result = await checkout_service.create_checkout(checkout_req)
  return result.model_dump(mode="json")


@router.post(
    "/{id}",
    response_model=dict[str, Any],
    operation_id="update_checkout_session",
    summary="Update Checkout Session",
)
async def update_checkout(
    checkout_id: str = Path(..., alias="id"),
    checkout_req: CheckoutSessionUpdateRequest = Body(...),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> dict[str, Any]:
  """Update a checkout session."""
  result = await checkout_service.update_checkout(checkout_id, checkout_req)
  return result.model_dump(mode="json")


@router.get(
    "/{id}",
    response_model=dict[str, Any],
    operation_id="get_checkout_session",
    summary="Retrieve Checkout Session",
)
async def get_checkout(
    checkout_id: str = Path(..., alias="id"),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> dict[str, Any]:
  """Retrieve a checkout session."""
  result = await checkout_service.get_checkout(checkout_id)
  return result.model_dump(mode="json")


@router.post(
    "/{id}/complete",
    response_model=dict[str, Any],
    operation_id="complete_checkout_session",
    summary="Complete Checkout Session",
)
async def complete_checkout(
    checkout_id: str = Path(..., alias="id"),
    complete_req: CheckoutSessionCompleteRequest = Body(...),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> dict[str, Any]:
  """Complete a checkout session with a payment token."""
  result = await checkout_service.complete_checkout(
      checkout_id, complete_req.buyer, complete_req.payment_data
  )
  return result.model_dump(mode="json")


@router.post(
    "/{id}/cancel",
    response_model=dict[str, Any],
    operation_id="cancel_checkout_session",
    summary="Cancel Checkout Session",
)
async def cancel_checkout(
    checkout_id: str = Path(..., alias="id"),
    checkout_service: CheckoutService = Depends(
        dependencies.get_checkout_service
    ),
) -> dict[str, Any]:
  """Cancel a checkout session."""
  result = await checkout_service.cancel_checkout(checkout_id)
  return result.model_dump(mode="json")
