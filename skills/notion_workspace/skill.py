"""
Notion workspace SkillDefinition: wires setup, tools, and lifecycle hooks
into the SkillServer protocol.

Usage:
    from skills.notion_workspace.skill import skill
"""

from __future__ import annotations

import logging
from typing import Any

from dev.types.skill_types import (
  SkillDefinition,
  SkillHooks,
  SkillTool,
  ToolResult,
)

from .client import build_client, close_client, get_client, set_client
from .config import load_config
from .errors import REMOTE_ERRORS, ClientNotInitialized
from .handlers import dispatch_tool
from .setup import on_setup_cancel, on_setup_start, on_setup_submit
from .tools import ALL_TOOLS

log = logging.getLogger("skill.notion_workspace.skill")


# ---------------------------------------------------------------------------
# Convert ToolDefinition objects → SkillTool objects
# ---------------------------------------------------------------------------


def _make_execute(tool_name: str):
  """Create an async execute function for a given tool name."""

  async def execute(args: dict[str, Any]) -> ToolResult:
    return await dispatch_tool(tool_name, args)

  return execute


def _convert_tools() -> list[SkillTool]:
  """Wrap every ToolDefinition with its dispatching execute function."""
  return [SkillTool(definition=d, execute=_make_execute(d.name)) for d in ALL_TOOLS]


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------


async def _on_load(ctx: Any) -> None:
  """Initialize the Notion client from config.json or NOTION_TOKEN."""
  await close_client()
  config = await load_config(ctx)

  if not config.token:
    log.error("Missing Notion integration token; run setup or set NOTION_TOKEN")
    ctx.set_state({"connected": False, "error": "Missing integration token"})
    return

  client = build_client(config.token)

  try:
    me = await client.users.me()
  except REMOTE_ERRORS:
    log.exception("Failed to validate Notion token")
    await client.aclose()
    ctx.set_state({"connected": False, "error": "Token validation failed"})
    return

  set_client(client)
  bot_name = me.get("name") or "integration"
  log.info("Connected to Notion as '%s'", bot_name)
  ctx.set_state({"connected": True, "bot_name": bot_name, "bot_id": me.get("id", "")})


async def _on_unload(ctx: Any) -> None:
  await close_client()
  log.info("Notion workspace skill unloaded")


async def _on_status(ctx: Any) -> dict[str, Any]:
  """Return current skill status information."""
  disconnected = {"connected": False, "bot_name": None, "bot_id": None}
  try:
    me = await get_client().users.me()
  except ClientNotInitialized:
    return disconnected
  except REMOTE_ERRORS:
    log.warning("Notion status check failed", exc_info=True)
    return disconnected

  return {
    "connected": True,
    "bot_name": me.get("name", "integration"),
    "bot_id": me.get("id", ""),
  }


# ---------------------------------------------------------------------------
# Skill definition
# ---------------------------------------------------------------------------

skill = SkillDefinition(
  name="notion_workspace",
  description="Notion workspace functions: list, search and create pages, read databases, and edit page blocks.",
  version="1.0.0",
  has_setup=True,
  tools=_convert_tools(),
  hooks=SkillHooks(
    on_load=_on_load,
    on_unload=_on_unload,
    on_status=_on_status,
    on_setup_start=on_setup_start,
    on_setup_submit=on_setup_submit,
    on_setup_cancel=on_setup_cancel,
  ),
)
