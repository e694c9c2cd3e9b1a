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

"""Order creation for completed checkout sessions."""

from acp_sandbox import ids
from acp_sandbox.clock import Clock
from acp_sandbox.enums import OrderStatus
from acp_sandbox.models import Order


class OrderFactory:
  """Creates the order confirming a completed checkout session."""

  def __init__(self, merchant_url: str, clock: Clock):
    self.merchant_url = merchant_url.rstrip("/")
    self.clock = clock

  def create(self, checkout_session_id: str) -> Order:
    order_id = ids.new_id(ids.ORDER_PREFIX)
    return Order(
        id=order_id,
        checkout_session_id=checkout_session_id,
        permalink_url=f"{self.merchant_url}/orders/{order_id}",
        status=OrderStatus.CREATED,
        created_at=self.clock.now(),
    )
