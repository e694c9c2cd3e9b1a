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

"""Request and resource models for the ACP sandbox server.

Resource models (checkout sessions, orders, payment tokens) are what the
stores hold and what the API returns. Request models are deliberately lenient
where the service owns the validation (e.g. payment method type), so that
failures surface with their dedicated error codes rather than as generic
parse errors.
"""

import datetime
from typing import Any, Dict, List, Optional

from acp_sandbox.enums import CheckoutStatus
from acp_sandbox.enums import OrderStatus
from acp_sandbox.enums import TotalType
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Item(BaseModel):
  """A caller-supplied item reference."""

  model_config = ConfigDict(extra="allow")

  id: str
  quantity: int = Field(default=1, ge=1)


class Address(BaseModel):
  model_config = ConfigDict(extra="allow")

  name: str
  line_one: str
  line_two: Optional[str] = None
  city: str
  state: str
  country: str
  postal_code: str


class Buyer(BaseModel):
  model_config = ConfigDict(extra="allow")

  first_name: str
  last_name: str
  email: str
  phone_number: Optional[str] = None


class LineItem(BaseModel):
  id: str
  item: Item
  base_amount: int
  discount: int = 0
  subtotal: int
  tax: int
  total: int


class FulfillmentOption(BaseModel):
  type: str = "shipping"
  id: str
  title: str
  subtitle: str
  carrier: str
  earliest_delivery_time: datetime.datetime
  latest_delivery_time: datetime.datetime
  subtotal: int
  tax: int
  total: int


class Total(BaseModel):
  type: TotalType
  display_text: str
  amount: int


class Message(BaseModel):
  type: str = "info"
  content_type: str = "plain"
  content: str


class Link(BaseModel):
  type: str
  url: str


class PaymentProvider(BaseModel):
  provider: str = "stripe"
  supported_payment_methods: List[str] = ["card"]


class Order(BaseModel):
  id: str
  checkout_session_id: str
  permalink_url: str
  status: OrderStatus = OrderStatus.CREATED
  created_at: datetime.datetime


class CheckoutSession(BaseModel):
  """A checkout session snapshot as stored and returned to clients."""

  id: str
  payment_provider: PaymentProvider = Field(default_factory=PaymentProvider)
  status: CheckoutStatus = CheckoutStatus.READY_FOR_PAYMENT
  currency: str
  line_items: List[LineItem]
  fulfillment_address: Optional[Address] = None
  fulfillment_option_id: str
  totals: List[Total]
  fulfillment_options: List[FulfillmentOption]
  messages: List[Message] = []
  links: List[Link] = []
  buyer: Optional[Buyer] = None
  order: Optional[Order] = None
  created_at: datetime.datetime
  updated_at: datetime.datetime

  def get_fulfillment_option(
      self, option_id: Optional[str]
  ) -> Optional[FulfillmentOption]:
    """Returns the option with the given id, if it is on the menu."""
    return next(
        (opt for opt in self.fulfillment_options if opt.id == option_id),
        None,
    )


class CheckoutSessionCreateRequest(BaseModel):
  items: Optional[List[Item]] = None
  buyer: Optional[Buyer] = None
  fulfillment_address: Optional[Address] = None


class CheckoutSessionUpdateRequest(BaseModel):
  items: Optional[List[Item]] = None
  fulfillment_address: Optional[Address] = None
  fulfillment_option_id: Optional[str] = None


class PaymentData(BaseModel):
  model_config = ConfigDict(extra="allow")

  token: Optional[str] = None
  provider: Optional[str] = None
  billing_address: Optional[Address] = None


class CheckoutSessionCompleteRequest(BaseModel):
  buyer: Optional[Buyer] = None
  payment_data: Optional[PaymentData] = None


class PaymentMethod(BaseModel):
  """Delegated payment credential; only `type` is interpreted."""

  model_config = ConfigDict(extra="allow")

  type: Optional[str] = None


class Allowance(BaseModel):
  model_config = ConfigDict(extra="allow")

  reason: Optional[str] = None
  max_amount: Optional[int] = None
  currency: Optional[str] = None
  checkout_session_id: Optional[str] = None
  merchant_id: Optional[str] = None
  expires_at: Optional[str] = None


class RiskSignal(BaseModel):
  model_config = ConfigDict(extra="allow")

  type: Optional[str] = None
  score: Optional[int] = None
  action: Optional[str] = None


class DelegatePaymentRequest(BaseModel):
  payment_method: Optional[PaymentMethod] = None
  allowance: Optional[Allowance] = None
  billing_address: Optional[Address] = None
  risk_signals: Optional[List[RiskSignal]] = None
  metadata: Optional[Dict[str, Any]] = None


class PaymentToken(BaseModel):
  """A delegated payment token record, kept server side only."""

  id: str
  created: datetime.datetime
  payment_method: PaymentMethod
  allowance: Allowance
  billing_address: Optional[Address] = None
  risk_signals: List[RiskSignal]
  metadata: Dict[str, Any] = {}


class DelegatePaymentResponse(BaseModel):
  id: str
  created: datetime.datetime
  metadata: Dict[str, Any] = {}


class WebhookEvent(BaseModel):
  model_config = ConfigDict(extra="allow")

  type: Optional[str] = None
  data: Optional[Dict[str, Any]] = None
