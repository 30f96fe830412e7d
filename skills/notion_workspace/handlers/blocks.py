"""Block handlers: list children, update, append and delete blocks."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from dev.types.skill_types import ToolResult

from ..blocks import BlockEdit, BlockSpec
from ..helpers import format_api_error, format_validation_error
from ..operations import get_operations

log = logging.getLogger("skill.notion_workspace.handlers.blocks")

_SPECS = TypeAdapter(list[BlockSpec])
_EDITS = TypeAdapter(list[BlockEdit])


async def notion_retrieve_block_content(args: dict[str, Any]) -> ToolResult:
  """List the direct children of a block or page."""
  block_id = args.get("block_id", "")
  if not block_id:
    return ToolResult(content="block_id is required", is_error=True)

  try:
    return ToolResult(content=await get_operations().retrieve_block_content(block_id))
  except Exception as e:
    return format_api_error("notion_retrieve_block_content", e)


async def notion_update_block_content(args: dict[str, Any]) -> ToolResult:
  """Replace the content of several blocks, one after another."""
  raw = args.get("block_updates")
  if raw is None:
    return ToolResult(content="block_updates array is required", is_error=True)

  try:
    edits = _EDITS.validate_python(raw)
  except ValidationError as e:
    log.warning("Rejected block_updates: %d problem(s)", e.error_count())
    return format_validation_error("block_updates", e)

  try:
    return ToolResult(content=await get_operations().update_block_content(edits))
  except Exception as e:
    return format_api_error("notion_update_block_content", e)


async def notion_add_block_content(args: dict[str, Any]) -> ToolResult:
  """Append content blocks to a parent block or page."""
  parent_id = args.get("parent_id", "")
  raw = args.get("blocks")

  if not parent_id:
    return ToolResult(content="parent_id is required", is_error=True)
  if raw is None:
    return ToolResult(content="blocks array is required", is_error=True)

  try:
    specs = _SPECS.validate_python(raw)
  except ValidationError as e:
    log.warning("Rejected blocks for %s: %d problem(s)", parent_id, e.error_count())
    return format_validation_error("blocks", e)

  try:
    return ToolResult(content=await get_operations().add_block_content(parent_id, specs))
  except Exception as e:
    return format_api_error("notion_add_block_content", e)


async def notion_delete_block_content(args: dict[str, Any]) -> ToolResult:
  """Delete a block."""
  block_id = args.get("block_id", "")
  if not block_id:
    return ToolResult(content="block_id is required", is_error=True)

  try:
    return ToolResult(content=await get_operations().delete_block_content(block_id))
  except Exception as e:
    return format_api_error("notion_delete_block_content", e)
