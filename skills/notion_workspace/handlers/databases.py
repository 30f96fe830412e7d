"""Database handlers."""

from __future__ import annotations

from typing import Any

from dev.types.skill_types import ToolResult

from ..helpers import format_api_error
from ..operations import get_operations


async def notion_get_database(args: dict[str, Any]) -> ToolResult:
  """Get a database by ID."""
  database_id = args.get("database_id", "")
  if not database_id:
    return ToolResult(content="database_id is required", is_error=True)

  try:
    return ToolResult(content=await get_operations().get_database(database_id))
  except Exception as e:
    return format_api_error("notion_get_database", e)
