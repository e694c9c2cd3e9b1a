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

"""Happy Path Client Script for the ACP sandbox.

This script demonstrates a basic "happy path" user journey:
1. Checking server health.
2. Creating a new checkout session with one item and a shipping address.
3. Switching the session to the express fulfillment option.
4. Delegating a card to obtain a payment token.
5. Completing the checkout with that token.
6. Retrieving the final session.

Usage:
  uv run client/happy_path_client.py --server_url=http://localhost:3000
"""

import argparse
import datetime
import logging
from typing import Any

from acp_sandbox.models import Address
from acp_sandbox.models import Allowance
from acp_sandbox.models import Buyer
from acp_sandbox.models import CheckoutSessionCompleteRequest
from acp_sandbox.models import CheckoutSessionCreateRequest
from acp_sandbox.models import CheckoutSessionUpdateRequest
from acp_sandbox.models import DelegatePaymentRequest
from acp_sandbox.models import Item
from acp_sandbox.models import PaymentData
from acp_sandbox.models import PaymentMethod
from acp_sandbox.models import RiskSignal
import httpx

logger = logging.getLogger(__name__)

TEST_ADDRESS = Address(
    name="Jane Smith",
    line_one="456 AI Boulevard",
    city="San Francisco",
    state="CA",
    country="US",
    postal_code="94102",
)

TEST_PAYMENT_METHOD = PaymentMethod(
    type="card",
    card_number_type="fpan",
    virtual=False,
    number="4242424242424242",
    exp_month="12",
    exp_year="2030",
    name="Jane Smith",
    cvc="123",
    checks_performed=["avs", "cvv"],
    iin="424242",
    display_card_funding_type="credit",
    display_brand="visa",
    display_last4="4242",
    metadata={},
)


class HappyPathError(Exception):
  """Raised when the server answers a step with an unexpected status."""


def get_headers(auth_token: str, api_version: str) -> dict[str, str]:
  """Generates necessary headers for ACP requests."""
  return {
      "Authorization": f"Bearer {auth_token}",
      "API-Version": api_version,
      "Accept": "application/json",
  }


def _check(response: httpx.Response, expected_status: int, step: str) -> Any:
  if response.status_code != expected_status:
    raise HappyPathError(
        f"{step} failed with {response.status_code}: {response.text}"
    )
  return response.json()


def _total(checkout: dict[str, Any]) -> int:
  return next(t["amount"] for t in checkout["totals"] if t["type"] == "total")


def run_happy_path(
    client: httpx.Client,
    auth_token: str = "test_token_12345",
    api_version: str = "2025-09-29",
) -> dict[str, Any]:
  """Walks a checkout from creation to completion.

  Args:
    client: An HTTP client whose base URL points at the server.
    auth_token: Bearer token sent with every request.
    api_version: Value of the API-Version header.

  Returns:
    A summary with the session id, token id, order id and final total.

  Raises:
    HappyPathError: If any step does not return the expected status.
  """
  headers = get_headers(auth_token, api_version)

  logger.info("STEP 1: Checking server health...")
  health = _check(client.get("/health"), 200, "Health check")
  logger.info("Server is %s", health["status"])

  logger.info("STEP 2: Creating checkout session...")
  create_req = CheckoutSessionCreateRequest(
      items=[Item(id="item_123", quantity=1)],
      fulfillment_address=TEST_ADDRESS,
  )
  checkout = _check(
      client.post(
          "/checkout_sessions",
          headers=headers,
          json=create_req.model_dump(mode="json", exclude_none=True),
      ),
      201,
      "Create checkout",
  )
  checkout_id = checkout["id"]
  logger.info("Session %s is %s", checkout_id, checkout["status"])

  logger.info("STEP 3: Selecting express fulfillment...")
  update_req = CheckoutSessionUpdateRequest(
      fulfillment_option_id=checkout["fulfillment_options"][1]["id"]
  )
  checkout = _check(
      client.post(
          f"/checkout_sessions/{checkout_id}",
          headers=headers,
          json=update_req.model_dump(mode="json", exclude_none=True),
      ),
      200,
      "Update checkout",
  )
  logger.info("Updated total: $%.2f", _total(checkout) / 100)

  logger.info("STEP 4: Delegating payment...")
  expires_at = datetime.datetime.now(
      datetime.timezone.utc
  ) + datetime.timedelta(hours=1)
  delegate_req = DelegatePaymentRequest(
      payment_method=TEST_PAYMENT_METHOD,
      allowance=Allowance(
          reason="one_time",
          max_amount=10000,
          currency="usd",
          checkout_session_id=checkout_id,
          merchant_id="test_merchant",
          expires_at=expires_at.isoformat(),
      ),
      billing_address=TEST_ADDRESS,
      risk_signals=[
          RiskSignal(type="card_testing", score=10, action="authorized")
      ],
      metadata={"source": "api_test", "test_mode": True},
  )
  token = _check(
      client.post(
          "/agentic_commerce/delegate_payment",
          headers=headers,
          json=delegate_req.model_dump(mode="json", exclude_none=True),
      ),
      201,
      "Delegate payment",
  )
  logger.info("Token %s issued", token["id"])

  logger.info("STEP 5: Completing checkout...")
  complete_req = CheckoutSessionCompleteRequest(
      buyer=Buyer(
          first_name="Jane", last_name="Smith", email="jane.smith@example.com"
      ),
      payment_data=PaymentData(
          token=token["id"], provider="stripe", billing_address=TEST_ADDRESS
      ),
  )
  checkout = _check(
      client.post(
          f"/checkout_sessions/{checkout_id}/complete",
          headers=headers,
          json=complete_req.model_dump(mode="json", exclude_none=True),
      ),
      200,
      "Complete checkout",
  )
  logger.info("Order %s created", checkout["order"]["id"])

  logger.info("STEP 6: Retrieving final session...")
  checkout = _check(
      client.get(f"/checkout_sessions/{checkout_id}", headers=headers),
      200,
      "Retrieve checkout",
  )

  return {
      "checkout_session_id": checkout_id,
      "token_id": token["id"],
      "order_id": checkout["order"]["id"],
      "status": checkout["status"],
      "total": _total(checkout),
  }


def main() -> None:

  parser = argparse.ArgumentParser()

  parser.add_argument(
      "--server_url",
      default="http://localhost:3000",
      help="Base URL of the ACP sandbox server",
  )
  parser.add_argument(
      "--auth_token",
      default="test_token_12345",
      help="Bearer token sent in the Authorization header",
  )
  parser.add_argument(
      "--api_version",
      default="2025-09-29",
      help="Value of the API-Version header",
  )

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
  )

  with httpx.Client(base_url=args.server_url) as client:
    try:
      summary = run_happy_path(client, args.auth_token, args.api_version)
    except (HappyPathError, httpx.HTTPError) as e:
      logger.error("Happy path failed: %s", e)
      raise SystemExit(1) from e

  logger.info("Summary:")
  logger.info(" - Session ID: %s", summary["checkout_session_id"])
  logger.info(" - Token ID: %s", summary["token_id"])
  logger.info(" - Order ID: %s", summary["order_id"])
  logger.info(" - Total amount: $%.2f", summary["total"] / 100)


if __name__ == "__main__":
  main()
