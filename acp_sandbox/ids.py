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

"""Identifier generation.

Identifiers are a readable prefix followed by an opaque random suffix. The
prefixes are relied upon by existing clients and must not change.
"""

import uuid

CHECKOUT_SESSION_PREFIX = "checkout_session_"
LINE_ITEM_PREFIX = "line_item_"
FULFILLMENT_OPTION_PREFIX = "fulfillment_option_"
ORDER_PREFIX = "ord_"
PAYMENT_TOKEN_PREFIX = "vt_"


def new_id(prefix: str, length: int = 12) -> str:
  """Returns `prefix` followed by `length` random hex characters."""
  return f"{prefix}{uuid.uuid4().hex[:length]}"
