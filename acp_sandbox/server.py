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

"""ACP Sandbox Merchant Server (Python/FastAPI)."""

import logging
import time
from typing import Sequence

from absl import app as absl_app
from acp_sandbox import config
from acp_sandbox.exceptions import AcpError
from acp_sandbox.exceptions import InvalidRequestError
from acp_sandbox.exceptions import ProcessingError
from acp_sandbox.routes.checkout import router as checkout_router
from acp_sandbox.routes.delegate_payment import router as delegate_payment_router
from acp_sandbox.routes.info import router as info_router
from acp_sandbox.routes.order import router as order_router
from acp_sandbox.routes.webhooks import router as webhooks_router
from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

# --- App Setup ---

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=config.get_server_info()["name"],
    version=config.get_server_version(),
    description=config.get_server_info()["description"],
    lifespan=config.lifespan,
)


def _json_path(loc: Sequence[int | str]) -> str:
  """Turns a validation error location into a JSON path like `$.items[0]`."""
  parts = list(loc)
  if parts and parts[0] == "body":
    parts = parts[1:]
  path = "$"
  for part in parts:
    if isinstance(part, int):
      path += f"[{part}]"
    else:
      path += f".{part}"
  return path


@app.middleware("http")
async def log_requests(request: Request, call_next):
  """Logs method, path, status and latency of every request."""
  start = time.perf_counter()
  response = await call_next(request)
  logger.info(
      "%s %s %d %.1fms",
      request.method,
      request.url.path,
      response.status_code,
      (time.perf_counter() - start) * 1000,
  )
  return response


@app.exception_handler(AcpError)
async def acp_exception_handler(request: Request, exc: AcpError):
  """Handles ACP-specific exceptions and converts them to JSON responses."""
  del request  # Unused.
  return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
  """Reports the first payload validation failure as an `invalid` error."""
  del request  # Unused.
  errors = exc.errors()
  first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}
  error = InvalidRequestError(first["msg"], param=_json_path(first["loc"]))
  return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
  """Converts anything that escaped the services into a processing error."""
  logger.error(
      "Unhandled error on %s %s",
      request.method,
      request.url.path,
      exc_info=exc,
  )
  error = ProcessingError()
  return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(checkout_router)
app.include_router(delegate_payment_router)
app.include_router(order_router)
app.include_router(webhooks_router)
app.include_router(info_router)


def main(argv: Sequence[str]) -> None:
  """Main entry point for the ACP sandbox server."""
  del argv  # Unused.

  host = config.get_flag("host")
  port = config.get_flag("port")
  logger.info("ACP Sandbox Server running on %s:%d", host, port)
  logger.info(
      "Required headers: Authorization: Bearer <token>, API-Version: %s",
      config.get_flag("api_version"),
  )
  uvicorn.run(app, host=host, port=port)


def run() -> None:
  """Console script entry point."""
  absl_app.run(main)


if __name__ == "__main__":
  run()
