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

"""Runs the happy path client against an in-process server."""

from absl.testing import absltest
from acp_sandbox import dependencies
from acp_sandbox import store
from acp_sandbox.server import app
from acp_sandbox.services.pricing_service import FixedPriceSource
from fastapi.testclient import TestClient
import happy_path_client


class HappyPathClientTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    store.manager.init_stores()
    app.dependency_overrides[dependencies.get_price_source] = (
        lambda: FixedPriceSource(1000)
    )
    self.client = TestClient(app)

  def tearDown(self) -> None:
    app.dependency_overrides.clear()
    super().tearDown()

  def test_happy_path(self) -> None:
    summary = happy_path_client.run_happy_path(self.client)

    self.assertEqual(summary["status"], "completed")
    self.assertTrue(summary["token_id"].startswith("vt_"))
    self.assertTrue(summary["order_id"].startswith("ord_"))
    # 1000 item + 100 tax + 500 express shipping.
    self.assertEqual(summary["total"], 1600)

  def test_wrong_api_version_stops_the_journey(self) -> None:
    with self.assertRaisesRegex(
        happy_path_client.HappyPathError, "Create checkout failed with 400"
    ):
      happy_path_client.run_happy_path(self.client, api_version="2020-01-01")


if __name__ == "__main__":
  absltest.main()
