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

"""Shared configuration and startup logic for the ACP sandbox server."""

import contextlib
import json
import os
from typing import Any, Dict, Optional

from absl import flags
from acp_sandbox import store
from fastapi import FastAPI

FLAGS = flags.FLAGS

_SERVER_INFO_CACHE: Optional[Dict[str, Any]] = None


def get_server_info() -> Dict[str, Any]:
  """Reads and caches the server description shown by the info endpoint."""
  global _SERVER_INFO_CACHE
  if _SERVER_INFO_CACHE:
    return _SERVER_INFO_CACHE

  current_dir = os.path.dirname(os.path.abspath(__file__))
  info_path = os.path.join(current_dir, "routes", "server_info.json")

  with open(info_path, "r", encoding="utf-8") as f:
    _SERVER_INFO_CACHE = json.load(f)
    return _SERVER_INFO_CACHE


def get_server_version() -> str:
  return get_server_info()["version"]


# Define flags only if they haven't been defined yet (to avoid duplicates
# during tests or re-imports)
try:
  flags.DEFINE_string("host", "0.0.0.0", "Interface to bind the server to")
  flags.DEFINE_integer("port", 3000, "Port to run the server on")
  flags.DEFINE_string(
      "api_version",
      "2025-09-29",
      "Value the API-Version request header must carry",
  )
  flags.DEFINE_string(
      "merchant_url",
      "https://www.testshop.com",
      "Base URL for order permalinks and legal links",
  )
  flags.DEFINE_string("currency", "usd", "Currency of new checkout sessions")
  flags.DEFINE_string(
      "webhook_url", None, "URL notified of order events, if any"
  )
  flags.DEFINE_integer(
      "item_price",
      None,
      "Fixed unit price in cents for every item; random prices if unset",
      lower_bound=1,
  )
except flags.DuplicateFlagError:
  pass


def get_flag(name: str) -> Any:
  """Returns a flag's value, or its default when flags were never parsed."""
  return FLAGS[name].value


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
  """Shared lifespan manager for initializing the in-memory stores."""
  del app  # Unused.
  store.manager.init_stores()
  yield
  await store.manager.close()
