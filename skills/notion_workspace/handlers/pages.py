"""Page handlers: create pages and rename them."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from dev.types.skill_types import ToolResult

from ..helpers import format_api_error, format_validation_error
from ..operations import PageDraft, get_operations

log = logging.getLogger("skill.notion_workspace.handlers.pages")


async def notion_create_page(args: dict[str, Any]) -> ToolResult:
  """Create a page with a title and content blocks under a parent page."""
  parent_id = args.get("parent_id", "")
  if not parent_id:
    return ToolResult(content="parent_id is required", is_error=True)

  try:
    draft = PageDraft.model_validate(args.get("data") or {})
  except ValidationError as e:
    log.warning("Rejected page data for %s: %d problem(s)", parent_id, e.error_count())
    return format_validation_error("data", e)

  try:
    return ToolResult(content=await get_operations().create_page(parent_id, draft))
  except Exception as e:
    return format_api_error("notion_create_page", e)


async def notion_update_page_title(args: dict[str, Any]) -> ToolResult:
  """Rename a page."""
  page_id = args.get("page_id", "")
  new_title = args.get("new_title")

  if not page_id:
    return ToolResult(content="page_id is required", is_error=True)
  if not isinstance(new_title, str):
    return ToolResult(content="new_title is required", is_error=True)

  try:
    return ToolResult(content=await get_operations().update_page_title(page_id, new_title))
  except Exception as e:
    return format_api_error("notion_update_page_title", e)
