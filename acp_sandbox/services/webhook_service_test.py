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

"""Tests for outbound webhook notifications."""

import asyncio
import datetime
import json
from typing import List

from absl.testing import absltest
from acp_sandbox.models import Order
from acp_sandbox.services import webhook_service
from acp_sandbox.services.webhook_service import WebhookNotifier
import httpx

_WEBHOOK_URL = "http://platform.test/webhooks"


class WebhookNotifierTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.requests: List[httpx.Request] = []

  def _notifier(self, handler) -> WebhookNotifier:
    def recording_handler(request: httpx.Request) -> httpx.Response:
      self.requests.append(request)
      return handler(request)

    return WebhookNotifier(
        _WEBHOOK_URL, transport=httpx.MockTransport(recording_handler)
    )

  def test_posts_type_and_data(self) -> None:
    notifier = self._notifier(lambda request: httpx.Response(200, text="OK"))

    delivered = asyncio.run(
        notifier.notify("order_create", {"checkout_session_id": "cs_1"})
    )

    self.assertTrue(delivered)
    self.assertLen(self.requests, 1)
    request = self.requests[0]
    self.assertEqual(request.method, "POST")
    self.assertEqual(str(request.url), _WEBHOOK_URL)
    self.assertEqual(
        json.loads(request.content),
        {"type": "order_create", "data": {"checkout_session_id": "cs_1"}},
    )

  def test_error_status_is_reported_not_raised(self) -> None:
    notifier = self._notifier(lambda request: httpx.Response(500))
    self.assertFalse(asyncio.run(notifier.notify("order_create", {})))

  def test_connection_failure_is_reported_not_raised(self) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
      raise httpx.ConnectError("connection refused", request=request)

    notifier = self._notifier(refuse)
    self.assertFalse(asyncio.run(notifier.notify("order_create", {})))

  def test_order_event_data(self) -> None:
    order = Order(
        id="ord_123",
        checkout_session_id="checkout_session_123",
        permalink_url="https://www.testshop.com/orders/ord_123",
        created_at=datetime.datetime(2025, 9, 29, tzinfo=datetime.timezone.utc),
    )

    self.assertEqual(
        webhook_service.order_event_data(order),
        {
            "type": "order",
            "checkout_session_id": "checkout_session_123",
            "permalink_url": "https://www.testshop.com/orders/ord_123",
            "status": "created",
            "refunds": [],
        },
    )


if __name__ == "__main__":
  absltest.main()
