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

"""Fulfillment service for generating delivery options.

This module encapsulates the fixed shipping menu offered on every checkout
session: a cheaper standard option and a faster express option.
"""

import datetime
from typing import List, NamedTuple

from acp_sandbox import ids
from acp_sandbox.clock import Clock
from acp_sandbox.models import FulfillmentOption


class ShippingRate(NamedTuple):
  title: str
  subtitle: str
  min_days: int
  max_days: int
  price: int  # In cents


DEFAULT_RATES = (
    ShippingRate("Express", "Arrives in 1-2 days", 1, 2, 500),
    ShippingRate("Standard", "Arrives in 4-5 days", 4, 5, 100),
)


class FulfillmentService:
  """Service for handling fulfillment logic."""

  def __init__(
      self,
      clock: Clock,
      carrier: str = "USPS",
      rates: tuple[ShippingRate, ...] = DEFAULT_RATES,
  ):
    self.clock = clock
    self.carrier = carrier
    self.rates = rates

  def generate_options(self) -> List[FulfillmentOption]:
    """Generates the shipping options of a new checkout session.

    Delivery windows are relative to the current time and every option gets
    a fresh id.

    Returns:
      A list of FulfillmentOption objects, cheapest first.
    """
    now = self.clock.now()
    options = []
    # Sort for deterministic output
    for rate in sorted(self.rates, key=lambda r: r.price):
      options.append(
          FulfillmentOption(
              id=ids.new_id(ids.FULFILLMENT_OPTION_PREFIX, 8),
              title=rate.title,
              subtitle=rate.subtitle,
              carrier=self.carrier,
              earliest_delivery_time=now
              + datetime.timedelta(days=rate.min_days),
              latest_delivery_time=now + datetime.timedelta(days=rate.max_days),
              subtotal=rate.price,
              tax=0,
              total=rate.price,
          )
      )
    return options
