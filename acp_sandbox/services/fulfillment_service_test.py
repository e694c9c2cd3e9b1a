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

"""Tests for the fulfillment option menu."""

import datetime

from absl.testing import absltest
from acp_sandbox.clock import Clock
from acp_sandbox.services.fulfillment_service import FulfillmentService
from acp_sandbox.services.fulfillment_service import ShippingRate

_NOW = datetime.datetime(2025, 9, 29, 12, tzinfo=datetime.timezone.utc)


class _FixedClock(Clock):

  def now(self) -> datetime.datetime:
    return _NOW


class FulfillmentServiceTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.service = FulfillmentService(_FixedClock())

  def test_generates_standard_then_express(self) -> None:
    standard, express = self.service.generate_options()

    self.assertEqual(standard.title, "Standard")
    self.assertEqual(standard.subtitle, "Arrives in 4-5 days")
    self.assertEqual(standard.total, 100)
    self.assertEqual(express.title, "Express")
    self.assertEqual(express.subtitle, "Arrives in 1-2 days")
    self.assertEqual(express.total, 500)

  def test_option_costs(self) -> None:
    for option in self.service.generate_options():
      self.assertEqual(option.type, "shipping")
      self.assertEqual(option.carrier, "USPS")
      self.assertEqual(option.tax, 0)
      self.assertEqual(option.total, option.subtotal + option.tax)

  def test_delivery_windows_are_relative_to_now(self) -> None:
    standard, express = self.service.generate_options()

    self.assertEqual(
        standard.earliest_delivery_time, _NOW + datetime.timedelta(days=4)
    )
    self.assertEqual(
        standard.latest_delivery_time, _NOW + datetime.timedelta(days=5)
    )
    self.assertEqual(
        express.earliest_delivery_time, _NOW + datetime.timedelta(days=1)
    )
    self.assertEqual(
        express.latest_delivery_time, _NOW + datetime.timedelta(days=2)
    )
    for option in (standard, express):
      self.assertLessEqual(
          option.earliest_delivery_time, option.latest_delivery_time
      )

  def test_express_costs_more_and_arrives_sooner(self) -> None:
    standard, express = self.service.generate_options()
    self.assertGreater(express.total, standard.total)
    self.assertLess(
        express.latest_delivery_time, standard.earliest_delivery_time
    )

  def test_each_option_gets_a_fresh_id(self) -> None:
    first = self.service.generate_options()
    second = self.service.generate_options()
    all_ids = [o.id for o in first + second]

    self.assertLen(set(all_ids), 4)
    for option_id in all_ids:
      self.assertTrue(option_id.startswith("fulfillment_option_"))

  def test_custom_rates_are_sorted_by_price(self) -> None:
    service = FulfillmentService(
        _FixedClock(),
        carrier="UPS",
        rates=(
            ShippingRate("Overnight", "Arrives tomorrow", 1, 1, 2500),
            ShippingRate("Ground", "Arrives in a week", 5, 7, 0),
        ),
    )
    options = service.generate_options()
    self.assertEqual([o.title for o in options], ["Ground", "Overnight"])
    self.assertEqual(options[0].carrier, "UPS")


if __name__ == "__main__":
  absltest.main()
