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

"""FastAPI dependencies for the ACP sandbox server.

This module contains dependency injection logic for FastAPI endpoints,
including:
- Header validation (Authorization, API-Version).
- Capability providers (clock, price source, stores, webhook notifier).
- Service instantiation (CheckoutService, DelegatePaymentService).

Tests swap any provider through `app.dependency_overrides`.
"""

from typing import Optional

from acp_sandbox import config
from acp_sandbox import store
from acp_sandbox.clock import Clock
from acp_sandbox.clock import SystemClock
from acp_sandbox.exceptions import InvalidApiVersionError
from acp_sandbox.exceptions import MissingAuthorizationError
from acp_sandbox.services.checkout_service import CheckoutService
from acp_sandbox.services.delegate_payment_service import DelegatePaymentService
from acp_sandbox.services.fulfillment_service import FulfillmentService
from acp_sandbox.services.order_service import OrderFactory
from acp_sandbox.services.pricing_service import FixedPriceSource
from acp_sandbox.services.pricing_service import LineItemFactory
from acp_sandbox.services.pricing_service import PriceSource
from acp_sandbox.services.pricing_service import RandomPriceSource
from acp_sandbox.services.webhook_service import WebhookNotifier
from fastapi import Depends
from fastapi import Header


async def validate_acp_headers(
    authorization: Optional[str] = Header(None),
    api_version: Optional[str] = Header(None, alias="API-Version"),
) -> None:
  """Checks bearer presence, then the API version."""
  if not authorization or not authorization.startswith("Bearer "):
    raise MissingAuthorizationError()

  expected_version = config.get_flag("api_version")
  if api_version != expected_version:
    raise InvalidApiVersionError(
        f"API-Version header must be {expected_version}"
    )


def get_clock() -> Clock:
  """Dependency provider for the clock."""
  return SystemClock()


def get_price_source() -> PriceSource:
  """Dependency provider for simulated item prices."""
  item_price = config.get_flag("item_price")
  if item_price is not None:
    return FixedPriceSource(item_price)
  return RandomPriceSource()


def get_store_manager() -> store.StoreManager:
  """Dependency provider for the process-wide stores."""
  return store.manager


def get_webhook_notifier() -> Optional[WebhookNotifier]:
  """Dependency provider for the order webhook, if one is configured."""
  webhook_url = config.get_flag("webhook_url")
  if not webhook_url:
    return None
  return WebhookNotifier(webhook_url)


def get_fulfillment_service(
    clock: Clock = Depends(get_clock),
) -> FulfillmentService:
  """Dependency provider for FulfillmentService."""
  return FulfillmentService(clock)


def get_checkout_service(
    clock: Clock = Depends(get_clock),
    price_source: PriceSource = Depends(get_price_source),
    stores: store.StoreManager = Depends(get_store_manager),
    fulfillment_service: FulfillmentService = Depends(get_fulfillment_service),
    webhook_notifier: Optional[WebhookNotifier] = Depends(
        get_webhook_notifier
    ),
) -> CheckoutService:
  """Dependency provider for CheckoutService."""
  merchant_url = config.get_flag("merchant_url")
  return CheckoutService(
      stores.checkout_sessions,
      stores.orders,
      fulfillment_service,
      LineItemFactory(price_source),
      OrderFactory(merchant_url, clock),
      clock,
      session_locks=stores.session_locks,
      payment_tokens=stores.payment_tokens,
      webhook_notifier=webhook_notifier,
      currency=config.get_flag("currency"),
      merchant_url=merchant_url,
  )


def get_delegate_payment_service(
    clock: Clock = Depends(get_clock),
    stores: store.StoreManager = Depends(get_store_manager),
) -> DelegatePaymentService:
  """Dependency provider for DelegatePaymentService."""
  return DelegatePaymentService(stores.payment_tokens, clock)
