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

"""Outbound webhook notifications to the platform."""

import logging
from typing import Any, Dict, Optional

from acp_sandbox.models import Order
import httpx

logger = logging.getLogger(__name__)

ORDER_CREATE_EVENT = "order_create"


def order_event_data(order: Order) -> Dict[str, Any]:
  """Builds the `data` object of an order webhook event."""
  return {
      "type": "order",
      "checkout_session_id": order.checkout_session_id,
      "permalink_url": order.permalink_url,
      "status": order.status.value,
      "refunds": [],
  }


class WebhookNotifier:
  """Posts `{type, data}` events to a configured webhook URL."""

  def __init__(
      self,
      webhook_url: str,
      timeout: float = 5.0,
      transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    self.webhook_url = webhook_url
    self.timeout = timeout
    self._transport = transport

  async def notify(self, event_type: str, data: Dict[str, Any]) -> bool:
    """Sends one event.

    Delivery failures are logged and reported, never raised: the platform
    being unreachable must not undo a checkout that already happened.

    Args:
      event_type: The event type, e.g. "order_create".
      data: The event payload.

    Returns:
      True if the webhook answered with a 2xx status.
    """
    payload = {"type": event_type, "data": data}
    try:
      async with httpx.AsyncClient(
          transport=self._transport, timeout=self.timeout
      ) as client:
        response = await client.post(self.webhook_url, json=payload)
        response.raise_for_status()
    except httpx.HTTPError as e:
      logger.error("Failed to notify webhook at %s: %s", self.webhook_url, e)
      return False
    logger.info("Delivered %s event to %s", event_type, self.webhook_url)
    return True
