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

"""Webhook receiver for the ACP sandbox server.

Events are only logged. Signature verification is not performed.
"""

import logging

from acp_sandbox.models import WebhookEvent
from fastapi import APIRouter
from fastapi import Body
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/webhooks",
    response_class=PlainTextResponse,
    operation_id="receive_webhook",
    summary="Webhook Receiver",
)
async def receive_webhook(event: WebhookEvent = Body(...)) -> str:
  """Logs an incoming webhook event."""
  logger.info("Webhook received: %s %s", event.type, event.data)
  return "OK"
