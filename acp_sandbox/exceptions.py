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

"""Custom exceptions for the ACP sandbox server.

Every failure a client can observe is an `AcpError`. The subclasses fix the
`type`, `code` and HTTP status of each failure kind so the error body
`{type, code, message, param?}` stays consistent across endpoints.
"""

import functools
import logging
from typing import Any, Dict, Optional

from acp_sandbox.enums import ErrorCode
from acp_sandbox.enums import ErrorType

logger = logging.getLogger(__name__)


class AcpError(Exception):
  """Base class for all ACP exceptions."""

  def __init__(
      self,
      message: str,
      code: ErrorCode = ErrorCode.INTERNAL_ERROR,
      error_type: ErrorType = ErrorType.PROCESSING_ERROR,
      status_code: int = 500,
      param: Optional[str] = None,
  ):
    self.message = message
    self.code = code
    self.error_type = error_type
    self.status_code = status_code
    self.param = param
    super().__init__(self.message)

  def to_dict(self) -> Dict[str, Any]:
    """Returns the JSON error body for this exception."""
    body = {
        "type": self.error_type.value,
        "code": self.code.value,
        "message": self.message,
    }
    if self.param is not None:
      body["param"] = self.param
    return body


class MissingAuthorizationError(AcpError):
  """Raised when the bearer Authorization header is absent."""

  def __init__(self, message: str = "Authorization header required"):
    super().__init__(
        message,
        code=ErrorCode.MISSING_AUTHORIZATION,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=401,
    )


class InvalidApiVersionError(AcpError):
  """Raised when the API-Version header does not match the server."""

  def __init__(self, message: str):
    super().__init__(
        message,
        code=ErrorCode.INVALID_API_VERSION,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=400,
    )


class InvalidRequestError(AcpError):
  """Raised when the request payload is invalid (e.g. missing fields)."""

  def __init__(self, message: str, param: Optional[str] = None):
    super().__init__(
        message,
        code=ErrorCode.INVALID,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=400,
        param=param,
    )


class ResourceNotFoundError(AcpError):
  """Raised when a requested resource is not found."""

  def __init__(self, message: str, param: str = "$.id"):
    super().__init__(
        message,
        code=ErrorCode.NOT_FOUND,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=404,
        param=param,
    )


class InvalidStatusError(AcpError):
  """Raised when an operation is illegal for the checkout's current status."""

  def __init__(self, message: str):
    super().__init__(
        message,
        code=ErrorCode.INVALID_STATUS,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=400,
        param="$.status",
    )


class CheckoutNotCancelableError(AcpError):
  """Raised when canceling a checkout that already reached a terminal state.

  Kept apart from `InvalidStatusError`: a repeated cancel is answered with
  405 while out-of-order updates and completes are answered with 400.
  """

  def __init__(self, message: str):
    super().__init__(
        message,
        code=ErrorCode.INVALID_STATUS,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=405,
        param="$.status",
    )


class InvalidCardError(AcpError):
  """Raised when a delegated payment method is not a card."""

  def __init__(self, message: str = "Payment method type must be card"):
    super().__init__(
        message,
        code=ErrorCode.INVALID_CARD,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=400,
        param="$.payment_method.type",
    )


class InvalidAllowanceError(AcpError):
  """Raised when a delegated payment allowance is not one-time."""

  def __init__(self, message: str = "Allowance reason must be one_time"):
    super().__init__(
        message,
        code=ErrorCode.INVALID_ALLOWANCE,
        error_type=ErrorType.INVALID_REQUEST,
        status_code=400,
        param="$.allowance.reason",
    )


class ProcessingError(AcpError):
  """Raised when processing fails for a reason the caller cannot fix."""

  def __init__(self, message: str = "Internal server error"):
    super().__init__(message)


def operation_boundary(func):
  """Converts unexpected failures of an async operation into ProcessingError.

  `AcpError`s pass through untouched. Anything else is logged with its
  traceback and replaced, so raw faults never reach the caller.
  """

  @functools.wraps(func)
  async def wrapper(*args, **kwargs):
    try:
      return await func(*args, **kwargs)
    except AcpError:
      raise
    except Exception as e:  # pylint: disable=broad-exception-caught
      logger.exception("Unexpected error in %s", func.__qualname__)
      raise ProcessingError() from e

  return wrapper
