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

"""Delegated payment service.

Validates a payment method / allowance / risk signal bundle and mints an
opaque payment token for it. The token record, including the card data, stays
on the server: callers only ever get the token id back.
"""

import logging

from acp_sandbox import ids
from acp_sandbox.clock import Clock
from acp_sandbox.exceptions import InvalidAllowanceError
from acp_sandbox.exceptions import InvalidCardError
from acp_sandbox.exceptions import InvalidRequestError
from acp_sandbox.exceptions import operation_boundary
from acp_sandbox.models import DelegatePaymentRequest
from acp_sandbox.models import DelegatePaymentResponse
from acp_sandbox.models import PaymentToken
from acp_sandbox.store import Store

logger = logging.getLogger(__name__)

SUPPORTED_PAYMENT_METHOD_TYPE = "card"
SUPPORTED_ALLOWANCE_REASON = "one_time"


class DelegatePaymentService:
  """Service for issuing delegated payment tokens."""

  def __init__(self, payment_tokens: Store[PaymentToken], clock: Clock):
    self.payment_tokens = payment_tokens
    self.clock = clock

  @operation_boundary
  async def delegate_payment(
      self, request: DelegatePaymentRequest
  ) -> DelegatePaymentResponse:
    """Validates the request and stores a new payment token."""
    payment_method = request.payment_method
    if (
        payment_method is None
        or payment_method.type != SUPPORTED_PAYMENT_METHOD_TYPE
    ):
      raise InvalidCardError()

    allowance = request.allowance
    if allowance is None or allowance.reason != SUPPORTED_ALLOWANCE_REASON:
      raise InvalidAllowanceError()

    if not request.risk_signals:
      raise InvalidRequestError(
          "At least one risk signal is required", param="$.risk_signals"
      )

    metadata = request.metadata or {}
    token = PaymentToken(
        id=ids.new_id(ids.PAYMENT_TOKEN_PREFIX),
        created=self.clock.now(),
        payment_method=payment_method,
        allowance=allowance,
        billing_address=request.billing_address,
        risk_signals=request.risk_signals,
        metadata=metadata,
    )
    await self.payment_tokens.put(token.id, token)
    logger.info("Issued payment token %s", token.id)

    return DelegatePaymentResponse(
        id=token.id, created=token.created, metadata=metadata
    )
