"""
Shared formatting and error handling helpers for the Notion workspace skill.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from dev.types.skill_types import ToolResult

from .errors import (
  BlockUpdateFailed,
  ClientNotInitialized,
  NotFound,
  NotionFunctionError,
  RemoteFailure,
  UnsupportedBlockType,
)

log = logging.getLogger("skill.notion_workspace.helpers")


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def _describe(error: NotionFunctionError) -> str:
  if isinstance(error, UnsupportedBlockType):
    return str(error)

  if isinstance(error, NotFound):
    return "Not found. Make sure the page/database/block is shared with your integration."

  if isinstance(error, RemoteFailure):
    if error.code == "unauthorized" or error.status == 401:
      return "Unauthorized. Check that your integration token is valid and the page is shared with it."
    if error.code == "rate_limited" or error.status == 429:
      return "Rate limited by Notion. Please try again in a moment."
    if error.code == "validation_error" or error.status == 400:
      return f"Validation error: {error}"
    if error.code == "restricted_resource":
      return "This resource is restricted. Make sure the integration has access."
    return f"Notion API error ({error.code or 'unknown'}, HTTP {error.status or 0}): {error}"

  return str(error)


def format_api_error(function_name: str, error: Exception) -> ToolResult:
  """Format a raised error into a user-facing error ToolResult."""
  if isinstance(error, BlockUpdateFailed):
    applied = ", ".join(error.applied) or "none"
    msg = (
      f"Block update stopped at entry {error.index} (block {error.block_id}): "
      f"{_describe(error.cause)}\n"
      f"Blocks already updated (not rolled back): {applied}"
    )
    log.error("[%s] partial update: %s", function_name, error)
    return ToolResult(content=msg, is_error=True)

  if isinstance(error, ClientNotInitialized):
    return ToolResult(content=str(error), is_error=True)

  if isinstance(error, UnsupportedBlockType):
    log.warning("[%s] %s", function_name, error)
    return ToolResult(content=_describe(error), is_error=True)

  if isinstance(error, NotionFunctionError):
    code = getattr(error, "code", None)
    status = getattr(error, "status", None)
    log.error("[%s] API error: %s (code=%s, status=%s)", function_name, error, code, status)
    return ToolResult(content=_describe(error), is_error=True)

  log.error("[%s] Unexpected error: %s", function_name, error, exc_info=True)
  return ToolResult(content=f"An error occurred in {function_name}: {error}", is_error=True)


# ---------------------------------------------------------------------------
# Formatting utilities
# ---------------------------------------------------------------------------


def make_rich_text(text: str) -> list[dict[str, Any]]:
  """Create a Notion rich_text array from a plain string."""
  return [{"type": "text", "text": {"content": text}}]


def find_title_property(page: dict[str, Any]) -> str:
  """Name of the page's title property ("title" for plain pages)."""
  for name, prop in page.get("properties", {}).items():
    if isinstance(prop, dict) and prop.get("type") == "title":
      return name
  return "title"


def results_to_json(data: Any) -> str:
  """Serialize data to a JSON string for tool results."""
  return json.dumps(data, indent=2, default=str)


def format_validation_error(argument: str, error: ValidationError) -> ToolResult:
  """Turn a pydantic error on a tool argument into an error ToolResult."""
  problems = "; ".join(
    f"{'.'.join(str(p) for p in err['loc']) or argument}: {err['msg']}" for err in error.errors()
  )
  return ToolResult(content=f"Invalid {argument}: {problems}", is_error=True)
