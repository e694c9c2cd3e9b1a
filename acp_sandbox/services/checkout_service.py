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

"""Checkout service for managing the lifecycle of checkout sessions.

This module provides the `CheckoutService` class, which encapsulates the
business logic for creating, retrieving, updating, completing and canceling
checkout sessions.

A session starts in `ready_for_payment` and ends in either `completed` or
`canceled`; nothing leaves a terminal state. Key responsibilities include:
- Validating every request against the session's current status before
  touching it, so a failed operation leaves the stored session as it was.
- Recomputing the totals from scratch on every mutation.
- Creating exactly one order per completed session.
- Notifying the platform webhook of new orders.

Mutations of one session are serialized with a per-session lock; each
operation reads a private copy of the session and writes it back once.
"""

import asyncio
import logging
from typing import Optional

from acp_sandbox import ids
from acp_sandbox.clock import Clock
from acp_sandbox.enums import CheckoutStatus
from acp_sandbox.enums import TERMINAL_STATUSES
from acp_sandbox.enums import TotalType
from acp_sandbox.exceptions import CheckoutNotCancelableError
from acp_sandbox.exceptions import InvalidRequestError
from acp_sandbox.exceptions import InvalidStatusError
from acp_sandbox.exceptions import ResourceNotFoundError
from acp_sandbox.exceptions import operation_boundary
from acp_sandbox.models import Buyer
from acp_sandbox.models import CheckoutSession
from acp_sandbox.models import CheckoutSessionCreateRequest
from acp_sandbox.models import CheckoutSessionUpdateRequest
from acp_sandbox.models import Link
from acp_sandbox.models import Message
from acp_sandbox.models import Order
from acp_sandbox.models import PaymentData
from acp_sandbox.models import PaymentToken
from acp_sandbox.services import pricing_service
from acp_sandbox.services import webhook_service
from acp_sandbox.services.fulfillment_service import FulfillmentService
from acp_sandbox.services.order_service import OrderFactory
from acp_sandbox.services.pricing_service import LineItemFactory
from acp_sandbox.services.webhook_service import WebhookNotifier
from acp_sandbox.store import SessionLocks
from acp_sandbox.store import Store

logger = logging.getLogger(__name__)

CANCELED_MESSAGE = "Checkout session has been canceled."


class CheckoutService:
  """Service for managing checkout sessions and orders."""

  def __init__(
      self,
      checkout_sessions: Store[CheckoutSession],
      orders: Store[Order],
      fulfillment_service: FulfillmentService,
      line_item_factory: LineItemFactory,
      order_factory: OrderFactory,
      clock: Clock,
      session_locks: Optional[SessionLocks] = None,
      payment_tokens: Optional[Store[PaymentToken]] = None,
      webhook_notifier: Optional[WebhookNotifier] = None,
      currency: str = "usd",
      merchant_url: str = "https://www.testshop.com",
  ):
    self.checkout_sessions = checkout_sessions
    self.orders = orders
    self.fulfillment_service = fulfillment_service
    self.line_item_factory = line_item_factory
    self.order_factory = order_factory
    self.clock = clock
    self.session_locks = session_locks or SessionLocks()
    self.payment_tokens = payment_tokens
    self.webhook_notifier = webhook_notifier
    self.currency = currency
    self.merchant_url = merchant_url.rstrip("/")

  @operation_boundary
  async def create_checkout(
      self, checkout_req: CheckoutSessionCreateRequest
  ) -> CheckoutSession:
    """Creates a new checkout session."""
    if not checkout_req.items:
      raise InvalidRequestError(
          "Items array is required and must not be empty", param="$.items"
      )

    checkout_id = ids.new_id(ids.CHECKOUT_SESSION_PREFIX)
    logger.info("Creating checkout session %s", checkout_id)

    line_items = self.line_item_factory.build(checkout_req.items)
    fulfillment_options = self.fulfillment_service.generate_options()
    # Default to the cheapest (standard) option.
    selected_option = fulfillment_options[0]
    now = self.clock.now()

    checkout = CheckoutSession(
        id=checkout_id,
        status=CheckoutStatus.READY_FOR_PAYMENT,
        currency=self.currency,
        line_items=line_items,
        fulfillment_address=checkout_req.fulfillment_address,
        fulfillment_option_id=selected_option.id,
        totals=pricing_service.calculate_totals(line_items, selected_option),
        fulfillment_options=fulfillment_options,
        messages=[],
        links=[
            Link(
                type="terms_of_use",
                url=f"{self.merchant_url}/legal/terms-of-use",
            )
        ],
        created_at=now,
        updated_at=now,
    )

    await self.checkout_sessions.put(checkout.id, checkout)
    return checkout

  @operation_boundary
  async def get_checkout(self, checkout_id: str) -> CheckoutSession:
    """Retrieves a checkout session."""
    return await self._get_and_validate_checkout(checkout_id)

  @operation_boundary
  async def update_checkout(
      self,
      checkout_id: str,
      checkout_req: CheckoutSessionUpdateRequest,
  ) -> CheckoutSession:
    """Updates a checkout session.

    Supplied fields replace the stored ones wholesale; line items are never
    merged. Totals are recomputed even when nothing price-relevant changed.

    Args:
      checkout_id: The id of the session to update.
      checkout_req: The fields to replace.

    Returns:
      The updated checkout session.
    """
    logger.info("Updating checkout session %s", checkout_id)

    lock = await self._lock_for(checkout_id)
    async with lock:
      existing = await self._get_and_validate_checkout(checkout_id)
      if existing.status in TERMINAL_STATUSES:
        raise InvalidStatusError(
            f"Cannot update session with status: {existing.status.value}"
        )

      if checkout_req.items is not None and not checkout_req.items:
        raise InvalidRequestError(
            "Items array must not be empty", param="$.items"
        )
      if (
          checkout_req.fulfillment_option_id is not None
          and existing.get_fulfillment_option(
              checkout_req.fulfillment_option_id
          )
          is None
      ):
        raise InvalidRequestError(
            "Invalid fulfillment option ID",
            param="$.fulfillment_option_id",
        )

      if checkout_req.items is not None:
        existing.line_items = self.line_item_factory.build(checkout_req.items)

      if checkout_req.fulfillment_address is not None:
        existing.fulfillment_address = checkout_req.fulfillment_address

      if checkout_req.fulfillment_option_id is not None:
        existing.fulfillment_option_id = checkout_req.fulfillment_option_id

      self._recalculate_totals(existing)
      existing.updated_at = self.clock.now()

      await self.checkout_sessions.put(existing.id, existing)
      return existing

  @operation_boundary
  async def complete_checkout(
      self,
      checkout_id: str,
      buyer: Optional[Buyer],
      payment_data: Optional[PaymentData],
  ) -> CheckoutSession:
    """Completes a checkout session and creates its order.

    Completion is one-shot: once a session is completed, any further attempt
    fails with an invalid status error and no second order is created.
    """
    logger.info("Completing checkout session %s", checkout_id)

    lock = await self._lock_for(checkout_id)
    async with lock:
      checkout = await self._get_and_validate_checkout(checkout_id)
      if checkout.status != CheckoutStatus.READY_FOR_PAYMENT:
        raise InvalidStatusError(
            f"Cannot complete session with status: {checkout.status.value}"
        )

      if payment_data is None or not payment_data.token:
        raise InvalidRequestError(
            "Payment data with token is required", param="$.payment_data"
        )
      await self._check_payment_token(payment_data.token)

      previous = checkout.model_copy(deep=True)
      order = self.order_factory.create(checkout.id)

      checkout.status = CheckoutStatus.COMPLETED
      checkout.buyer = buyer
      checkout.order = order
      checkout.updated_at = self.clock.now()

      # No order may exist for a session that is still ready_for_payment.
      await self.checkout_sessions.put(checkout.id, checkout)
      try:
        await self.orders.put(order.id, order)
      except Exception:
        await self.checkout_sessions.put(previous.id, previous)
        raise
      logger.info(
          "Created order %s for session %s, total %d",
          order.id,
          checkout.id,
          pricing_service.get_total(checkout.totals, TotalType.TOTAL),
      )

    await self._notify_webhook(order)
    return checkout

  @operation_boundary
  async def cancel_checkout(self, checkout_id: str) -> CheckoutSession:
    """Cancels a checkout session."""
    logger.info("Canceling checkout session %s", checkout_id)

    lock = await self._lock_for(checkout_id)
    async with lock:
      checkout = await self._get_and_validate_checkout(checkout_id)
      if checkout.status in TERMINAL_STATUSES:
        raise CheckoutNotCancelableError(
            f"Cannot cancel session with status: {checkout.status.value}"
        )

      checkout.status = CheckoutStatus.CANCELED
      checkout.messages = [Message(content=CANCELED_MESSAGE)]
      checkout.updated_at = self.clock.now()

      await self.checkout_sessions.put(checkout.id, checkout)
      return checkout

  @operation_boundary
  async def get_order(self, order_id: str) -> Order:
    """Retrieves an order."""
    order = await self.orders.get(order_id)
    if order is None:
      raise ResourceNotFoundError("Order not found")
    return order

  async def _get_and_validate_checkout(
      self, checkout_id: str
  ) -> CheckoutSession:
    """Retrieves a checkout session and validates its existence."""
    checkout = await self.checkout_sessions.get(checkout_id)
    if checkout is None:
      raise ResourceNotFoundError("Checkout session not found")
    return checkout

  async def _lock_for(self, checkout_id: str) -> asyncio.Lock:
    """Returns the lock of an existing session.

    Sessions are never deleted, so checking existence before taking the lock
    is safe, and unknown ids never get a lock allocated.
    """
    await self._get_and_validate_checkout(checkout_id)
    return self.session_locks.get(checkout_id)

  def _recalculate_totals(self, checkout: CheckoutSession) -> None:
    """Replaces the totals with those of the current items and option."""
    selected_option = checkout.get_fulfillment_option(
        checkout.fulfillment_option_id
    )
    checkout.totals = pricing_service.calculate_totals(
        checkout.line_items, selected_option
    )

  async def _check_payment_token(self, token: str) -> None:
    """Logs tokens that were not issued by this server.

    Unknown tokens are still accepted: the sandbox does not capture payments
    and clients may complete sessions with tokens minted elsewhere.
    """
    if self.payment_tokens is None:
      return
    if await self.payment_tokens.get(token) is None:
      logger.warning("Payment token %s was not issued by this server", token)

  async def _notify_webhook(self, order: Order) -> None:
    """Notifies the configured webhook of a new order."""
    if self.webhook_notifier is None:
      return
    await self.webhook_notifier.notify(
        webhook_service.ORDER_CREATE_EVENT,
        webhook_service.order_event_data(order),
    )
