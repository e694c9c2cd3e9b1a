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

"""Tests for the in-memory stores."""

import asyncio

from absl.testing import absltest
from acp_sandbox import store
from acp_sandbox.models import Item
from acp_sandbox.models import PaymentMethod


class InMemoryStoreTest(absltest.TestCase):

  def test_get_missing_returns_none(self) -> None:
    records = store.InMemoryStore()
    self.assertIsNone(asyncio.run(records.get("nope")))
    self.assertEqual(asyncio.run(records.size()), 0)

  def test_put_replaces_by_key(self) -> None:
    records = store.InMemoryStore()
    asyncio.run(records.put("a", Item(id="item_1", quantity=1)))
    asyncio.run(records.put("a", Item(id="item_1", quantity=2)))

    self.assertEqual(asyncio.run(records.get("a")).quantity, 2)
    self.assertEqual(asyncio.run(records.size()), 1)

  def test_records_are_isolated_from_callers(self) -> None:
    records = store.InMemoryStore()
    method = PaymentMethod(type="card", metadata={"k": "v"})
    asyncio.run(records.put("pm", method))

    # Mutating the written object or a read copy must not leak into the store.
    method.type = "paypal"
    read = asyncio.run(records.get("pm"))
    read.metadata["k"] = "changed"

    stored = asyncio.run(records.get("pm"))
    self.assertEqual(stored.type, "card")
    self.assertEqual(stored.metadata, {"k": "v"})


class SessionLocksTest(absltest.TestCase):

  def test_one_lock_per_key(self) -> None:
    locks = store.SessionLocks()
    self.assertIs(locks.get("a"), locks.get("a"))
    self.assertIsNot(locks.get("a"), locks.get("b"))


class StoreManagerTest(absltest.TestCase):

  def test_init_stores_starts_empty(self) -> None:
    manager = store.StoreManager()
    asyncio.run(manager.orders.put("ord_1", Item(id="not_an_order")))
    manager.init_stores()

    self.assertEqual(asyncio.run(manager.checkout_sessions.size()), 0)
    self.assertEqual(asyncio.run(manager.orders.size()), 0)
    self.assertEqual(asyncio.run(manager.payment_tokens.size()), 0)

  def test_close(self) -> None:
    manager = store.StoreManager()
    with self.assertLogs(store.logger, level="INFO") as logs:
      asyncio.run(manager.close())
    self.assertIn("0 checkout sessions", logs.output[0])


if __name__ == "__main__":
  absltest.main()
