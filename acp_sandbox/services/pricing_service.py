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

"""Pricing for checkout sessions.

This module holds the price sources that simulate a catalog, the factory that
turns item references into priced line items, and the calculator producing a
session's totals breakdown. All amounts are integers in minor currency units.
"""

import random
from typing import Dict, List, Optional, Sequence

from acp_sandbox import ids
from acp_sandbox.enums import TotalType
from acp_sandbox.models import FulfillmentOption
from acp_sandbox.models import Item
from acp_sandbox.models import LineItem
from acp_sandbox.models import Total

TAX_RATE_PERCENT = 10

_DISPLAY_TEXT = {
    TotalType.ITEMS_BASE_AMOUNT: "Item(s) total",
    TotalType.SUBTOTAL: "Subtotal",
    TotalType.TAX: "Tax",
    TotalType.FULFILLMENT: "Fulfillment",
    TotalType.TOTAL: "Total",
}


def compute_tax(amount: int) -> int:
  """Flat-rate tax, floored to a whole minor unit."""
  return amount * TAX_RATE_PERCENT // 100


class PriceSource:
  """Supplies the simulated unit price of an item."""

  def unit_amount(self, item: Item) -> int:
    raise NotImplementedError


class RandomPriceSource(PriceSource):
  """Draws unit prices uniformly from [min_amount, max_amount)."""

  def __init__(
      self,
      min_amount: int = 1000,
      max_amount: int = 6000,
      rng: Optional[random.Random] = None,
  ):
    if min_amount <= 0 or max_amount <= min_amount:
      raise ValueError(f"Invalid price range [{min_amount}, {max_amount})")
    self.min_amount = min_amount
    self.max_amount = max_amount
    self._rng = rng or random.Random()

  def unit_amount(self, item: Item) -> int:
    return self._rng.randrange(self.min_amount, self.max_amount)


class FixedPriceSource(PriceSource):
  """Looks unit prices up by item id, falling back to a default."""

  def __init__(
      self, default_amount: int, amounts: Optional[Dict[str, int]] = None
  ):
    self.default_amount = default_amount
    self.amounts = amounts or {}

  def unit_amount(self, item: Item) -> int:
    return self.amounts.get(item.id, self.default_amount)


class LineItemFactory:
  """Builds priced line items from item references."""

  def __init__(self, price_source: PriceSource):
    self.price_source = price_source

  def build(self, items: Sequence[Item]) -> List[LineItem]:
    line_items = []
    for item in items:
      base_amount = self.price_source.unit_amount(item) * item.quantity
      if base_amount <= 0:
        raise ValueError(f"Non-positive price {base_amount} for {item.id}")
      tax = compute_tax(base_amount)
      line_items.append(
          LineItem(
              id=ids.new_id(ids.LINE_ITEM_PREFIX, 8),
              item=item,
              base_amount=base_amount,
              subtotal=base_amount,
              tax=tax,
              total=base_amount + tax,
          )
      )
    return line_items


def calculate_totals(
    line_items: Sequence[LineItem],
    fulfillment_option: Optional[FulfillmentOption],
) -> List[Total]:
  """Computes the totals breakdown of a checkout.

  Args:
    line_items: The checkout's current line items.
    fulfillment_option: The selected fulfillment option, if any.

  Returns:
    The items, subtotal, tax, fulfillment and total entries, in that order.
    Every entry is present even when its amount is zero.
  """
  items_base_amount = sum(li.base_amount for li in line_items)
  subtotal = items_base_amount
  tax = compute_tax(subtotal)
  fulfillment = fulfillment_option.total if fulfillment_option else 0
  amounts = [
      (TotalType.ITEMS_BASE_AMOUNT, items_base_amount),
      (TotalType.SUBTOTAL, subtotal),
      (TotalType.TAX, tax),
      (TotalType.FULFILLMENT, fulfillment),
      (TotalType.TOTAL, subtotal + tax + fulfillment),
  ]
  return [
      Total(
          type=total_type,
          display_text=_DISPLAY_TEXT[total_type],
          amount=amount,
      )
      for total_type, amount in amounts
  ]


def get_total(totals: Sequence[Total], total_type: TotalType) -> int:
  """Returns the amount of the entry of the given type, or 0."""
  return next((t.amount for t in totals if t.type == total_type), 0)
