"""
Notion workspace setup flow: single-step token configuration.

Steps:
  1. token: Enter Integration Token from notion.so/my-integrations

The token is validated by calling the Notion API (users.me()).
On success the token and workspace info are persisted to config.json.

Setup state is module-level (transient). If the process restarts
mid-setup the user must restart the flow.
"""

from __future__ import annotations

import logging
from typing import Any

from notion_client import APIResponseError

from dev.types.setup_types import (
  SetupField,
  SetupFieldError,
  SetupResult,
  SetupStep,
)

from .client import build_client
from .config import CONFIG_FILE, BotUser, NotionConfig
from .errors import REMOTE_ERRORS

log = logging.getLogger("skill.notion_workspace.setup")

TOKEN_PREFIXES = ("ntn_", "secret_")

# ---------------------------------------------------------------------------
# Module-level transient state (cleared on restart or cancel)
# ---------------------------------------------------------------------------

_token: str = ""


def _reset_state() -> None:
  global _token
  _token = ""


# ---------------------------------------------------------------------------
# Step definitions
# ---------------------------------------------------------------------------

STEP_TOKEN = SetupStep(
  id="token",
  title="Connect Notion Workspace",
  description=(
    "Enter your Notion Internal Integration Token. "
    "Create one at https://www.notion.so/my-integrations, "
    "then share the pages and databases you want to access with the integration."
  ),
  fields=[
    SetupField(
      name="token",
      type="password",
      label="Integration Token",
      description="Starts with ntn_ or secret_",
      required=True,
      placeholder="ntn_...",
    ),
    SetupField(
      name="workspace_name",
      type="text",
      label="Workspace Label (optional)",
      description="A friendly name for this workspace",
      required=False,
      placeholder="My Workspace",
    ),
  ],
)


def _token_error(message: str) -> SetupResult:
  return SetupResult(status="error", errors=[SetupFieldError(field="token", message=message)])


# ---------------------------------------------------------------------------
# Hook handlers
# ---------------------------------------------------------------------------


async def on_setup_start(ctx: Any) -> SetupStep:
  """Return the first (and only) step."""
  _reset_state()
  return STEP_TOKEN


async def on_setup_submit(ctx: Any, step_id: str, values: dict[str, Any]) -> SetupResult:
  """Handle form submission."""
  if step_id == "token":
    return await _handle_token(ctx, values)

  return _token_error(f"Unknown step: {step_id}")


async def on_setup_cancel(ctx: Any) -> None:
  """User cancelled setup."""
  _reset_state()
  log.info("Setup cancelled")


# ---------------------------------------------------------------------------
# Step handler
# ---------------------------------------------------------------------------


async def _handle_token(ctx: Any, values: dict[str, Any]) -> SetupResult:
  """Validate the integration token by calling users.me()."""
  global _token

  token = (values.get("token") or "").strip()
  workspace_name = (values.get("workspace_name") or "").strip()

  if not token:
    return _token_error("Token is required")

  if not token.startswith(TOKEN_PREFIXES):
    return _token_error("Token should start with 'ntn_' or 'secret_'. Check your integration page.")

  try:
    async with build_client(token) as client:
      me = await client.users.me()
  except APIResponseError as e:
    if getattr(e, "status", 0) == 401:
      return _token_error("Invalid token, Notion returned 401 Unauthorized.")
    return _token_error(f"Notion API error: {e}")
  except REMOTE_ERRORS as e:
    log.exception("Connection error during setup")
    return _token_error(f"Connection failed: {e}")

  _token = token
  return await _complete_setup(ctx, me, workspace_name)


async def _complete_setup(ctx: Any, bot_user: dict[str, Any], workspace_name: str) -> SetupResult:
  """Save config and return completion."""
  config = NotionConfig(
    token=_token,
    workspace_name=workspace_name or bot_user.get("name") or "Notion",
    bot_user=BotUser(
      id=bot_user.get("id") or "",
      name=bot_user.get("name") or "",
      type=bot_user.get("type") or "bot",
    ),
  )

  await ctx.write_data(CONFIG_FILE, config.to_json())

  _reset_state()

  bot_name = bot_user.get("name") or "integration"
  return SetupResult(
    status="complete",
    message=f"Connected to Notion as '{bot_name}'. Share pages with your integration to give it access.",
  )
