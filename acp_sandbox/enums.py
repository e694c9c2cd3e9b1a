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

"""Enumerations for the ACP sandbox server.

This module defines standard enums used throughout the server application
to represent the state of checkout sessions and orders, the entries of a
totals breakdown and the error taxonomy returned to clients.
"""

import enum


class CheckoutStatus(str, enum.Enum):
  READY_FOR_PAYMENT = "ready_for_payment"
  COMPLETED = "completed"
  CANCELED = "canceled"


TERMINAL_STATUSES = frozenset(
    [CheckoutStatus.COMPLETED, CheckoutStatus.CANCELED]
)


class OrderStatus(str, enum.Enum):
  CREATED = "created"


class TotalType(str, enum.Enum):
  ITEMS_BASE_AMOUNT = "items_base_amount"
  SUBTOTAL = "subtotal"
  TAX = "tax"
  FULFILLMENT = "fulfillment"
  TOTAL = "total"


class ErrorType(str, enum.Enum):
  INVALID_REQUEST = "invalid_request"
  PROCESSING_ERROR = "processing_error"


class ErrorCode(str, enum.Enum):
  MISSING_AUTHORIZATION = "missing_authorization"
  INVALID_API_VERSION = "invalid_api_version"
  INVALID = "invalid"
  NOT_FOUND = "not_found"
  INVALID_STATUS = "invalid_status"
  INVALID_CARD = "invalid_card"
  INVALID_ALLOWANCE = "invalid_allowance"
  INTERNAL_ERROR = "internal_error"
