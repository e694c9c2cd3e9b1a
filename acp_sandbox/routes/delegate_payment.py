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

"""Delegated payment routes for the ACP sandbox server."""

from typing import Any

from acp_sandbox import dependencies
from acp_sandbox.models import DelegatePaymentRequest
from acp_sandbox.services.delegate_payment_service import DelegatePaymentService
from fastapi import APIRouter
from fastapi import Body
from fastapi import Depends

router = APIRouter(
    prefix="/agentic_commerce",
    dependencies=[Depends(dependencies.validate_acp_headers)],
)


@router.post(
    "/delegate_payment",
    response_model=dict[str, Any],
    status_code=201,
    operation_id="delegate_payment",
    summary="Delegate Payment",
)
async def delegate_payment(
    delegate_req: DelegatePaymentRequest = Body(...),
    delegate_payment_service: DelegatePaymentService = Depends(
        dependencies.get_delegate_payment_service
    ),
) -> dict[str, Any]:
  """Exchange a payment method for an opaque payment token."""
  result = await delegate_payment_service.delegate_payment(delegate_req)
  return result.model_dump(mode="json")
