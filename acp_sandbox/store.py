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

"""Storage layer for the ACP sandbox server.

This module provides the keyed store abstraction used by the services and the
in-memory implementation the sandbox runs on. Nothing is persisted beyond the
lifetime of the process: every store starts empty.

Key features include:
- `Store`: the async `get` / `put` / `size` interface the services depend on.
- `InMemoryStore`: a dict-backed store that hands out deep copies, so callers
  can only change a record by writing it back with `put`.
- `SessionLocks`: one `asyncio.Lock` per checkout session id, serializing
  read-modify-write cycles on the same session.
- `StoreManager`: owns the process-wide stores (initialized via lifespan).
"""

import abc
import asyncio
import logging
from typing import Dict, Generic, Optional, TypeVar

from acp_sandbox.models import CheckoutSession
from acp_sandbox.models import Order
from acp_sandbox.models import PaymentToken
from pydantic import BaseModel

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class Store(abc.ABC, Generic[RecordT]):
  """Keyed collection of records."""

  @abc.abstractmethod
  async def get(self, key: str) -> Optional[RecordT]:
    """Returns the record stored under `key`, or None."""

  @abc.abstractmethod
  async def put(self, key: str, record: RecordT) -> None:
    """Stores `record` under `key`, replacing any previous record."""

  @abc.abstractmethod
  async def size(self) -> int:
    """Returns the number of stored records."""


class InMemoryStore(Store[RecordT]):
  """Store backed by a dict living in process memory."""

  def __init__(self) -> None:
    self._records: Dict[str, RecordT] = {}

  async def get(self, key: str) -> Optional[RecordT]:
    record = self._records.get(key)
    if record is None:
      return None
    return record.model_copy(deep=True)

  async def put(self, key: str, record: RecordT) -> None:
    self._records[key] = record.model_copy(deep=True)

  async def size(self) -> int:
    return len(self._records)


class SessionLocks:
  """Hands out one lock per checkout session id."""

  def __init__(self) -> None:
    self._locks: Dict[str, asyncio.Lock] = {}

  def get(self, key: str) -> asyncio.Lock:
    lock = self._locks.get(key)
    if lock is None:
      lock = asyncio.Lock()
      self._locks[key] = lock
    return lock


class StoreManager:
  """Manages the process-wide stores without module-level dicts."""

  def __init__(self) -> None:
    self.init_stores()

  def init_stores(self) -> None:
    """Replaces every store with an empty one."""
    self.checkout_sessions: Store[CheckoutSession] = InMemoryStore()
    self.orders: Store[Order] = InMemoryStore()
    self.payment_tokens: Store[PaymentToken] = InMemoryStore()
    self.session_locks = SessionLocks()

  async def close(self) -> None:
    """Logs what is about to be discarded at shutdown."""
    logger.info(
        "Discarding %d checkout sessions, %d orders and %d payment tokens",
        await self.checkout_sessions.size(),
        await self.orders.size(),
        await self.payment_tokens.size(),
    )


# Global manager instance (reset via lifespan)
manager = StoreManager()
