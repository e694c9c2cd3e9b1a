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

"""Tests for delegated payment token issuance."""

import asyncio
import datetime

from absl.testing import absltest
from acp_sandbox.clock import Clock
from acp_sandbox.exceptions import InvalidAllowanceError
from acp_sandbox.exceptions import InvalidCardError
from acp_sandbox.exceptions import InvalidRequestError
from acp_sandbox.models import Allowance
from acp_sandbox.models import DelegatePaymentRequest
from acp_sandbox.models import PaymentMethod
from acp_sandbox.models import RiskSignal
from acp_sandbox.services.delegate_payment_service import DelegatePaymentService
from acp_sandbox.store import InMemoryStore

_NOW = datetime.datetime(2025, 9, 29, tzinfo=datetime.timezone.utc)


class _FixedClock(Clock):

  def now(self) -> datetime.datetime:
    return _NOW


def _request(**overrides) -> DelegatePaymentRequest:
  fields = {
      "payment_method": PaymentMethod(
          type="card", number="4242424242424242", display_last4="4242"
      ),
      "allowance": Allowance(
          reason="one_time",
          max_amount=10000,
          currency="usd",
          checkout_session_id="checkout_session_123",
          merchant_id="test_merchant",
      ),
      "risk_signals": [
          RiskSignal(type="card_testing", score=10, action="authorized")
      ],
      "metadata": {"source": "api_test"},
  }
  fields.update(overrides)
  return DelegatePaymentRequest(**fields)


class DelegatePaymentServiceTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.tokens = InMemoryStore()
    self.service = DelegatePaymentService(self.tokens, _FixedClock())

  def _delegate(self, request: DelegatePaymentRequest):
    return asyncio.run(self.service.delegate_payment(request))

  def _token_count(self) -> int:
    return asyncio.run(self.tokens.size())

  def test_issues_token(self) -> None:
    response = self._delegate(_request())

    self.assertTrue(response.id.startswith("vt_"))
    self.assertEqual(response.created, _NOW)
    self.assertEqual(response.metadata, {"source": "api_test"})
    self.assertEqual(
        set(response.model_dump().keys()), {"id", "created", "metadata"}
    )

    stored = asyncio.run(self.tokens.get(response.id))
    self.assertEqual(stored.payment_method.type, "card")
    self.assertEqual(stored.allowance.reason, "one_time")
    self.assertLen(stored.risk_signals, 1)

  def test_metadata_defaults_to_empty(self) -> None:
    response = self._delegate(_request(metadata=None))
    self.assertEqual(response.metadata, {})

  def test_each_token_is_unique(self) -> None:
    first = self._delegate(_request())
    second = self._delegate(_request())
    self.assertNotEqual(first.id, second.id)
    self.assertEqual(self._token_count(), 2)

  def test_rejects_non_card_payment_method(self) -> None:
    for payment_method in (None, PaymentMethod(type="paypal"), PaymentMethod()):
      with self.subTest(payment_method=payment_method):
        with self.assertRaises(InvalidCardError) as cm:
          self._delegate(_request(payment_method=payment_method))
        self.assertEqual(cm.exception.param, "$.payment_method.type")
    self.assertEqual(self._token_count(), 0)

  def test_rejects_non_one_time_allowance(self) -> None:
    for allowance in (None, Allowance(reason="recurring")):
      with self.subTest(allowance=allowance):
        with self.assertRaises(InvalidAllowanceError) as cm:
          self._delegate(_request(allowance=allowance))
        self.assertEqual(cm.exception.param, "$.allowance.reason")
    self.assertEqual(self._token_count(), 0)

  def test_requires_risk_signals(self) -> None:
    for risk_signals in (None, []):
      with self.subTest(risk_signals=risk_signals):
        with self.assertRaises(InvalidRequestError) as cm:
          self._delegate(_request(risk_signals=risk_signals))
        self.assertEqual(cm.exception.param, "$.risk_signals")
    self.assertEqual(self._token_count(), 0)

  def test_card_is_checked_before_allowance(self) -> None:
    with self.assertRaises(InvalidCardError):
      self._delegate(
          _request(
              payment_method=PaymentMethod(type="paypal"),
              allowance=Allowance(reason="recurring"),
          )
      )


if __name__ == "__main__":
  absltest.main()
