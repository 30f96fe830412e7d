"""Search/listing handlers: list databases and pages, search pages by title."""

from __future__ import annotations

from typing import Any

from dev.types.skill_types import ToolResult

from ..helpers import format_api_error
from ..operations import get_operations


async def notion_list_databases(args: dict[str, Any]) -> ToolResult:
  """List all databases shared with the integration."""
  try:
    return ToolResult(content=await get_operations().list_databases())
  except Exception as e:
    return format_api_error("notion_list_databases", e)


async def notion_list_pages(args: dict[str, Any]) -> ToolResult:
  """List all pages shared with the integration."""
  try:
    return ToolResult(content=await get_operations().list_pages())
  except Exception as e:
    return format_api_error("notion_list_pages", e)


async def notion_search_pages(args: dict[str, Any]) -> ToolResult:
  """Search pages by title."""
  query = args.get("query")
  if not isinstance(query, str):
    return ToolResult(content="query is required", is_error=True)

  try:
    return ToolResult(content=await get_operations().search_pages(query))
  except Exception as e:
    return format_api_error("notion_search_pages", e)
