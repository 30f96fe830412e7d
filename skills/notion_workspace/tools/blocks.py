"""
Block tools (4 tools).
"""

from __future__ import annotations

from typing import Any

from dev.types.skill_types import ToolDefinition

from ..blocks import supported_types


def block_item_schema(text_description: str, with_id: bool = False) -> dict[str, Any]:
  """Item schema for a {type, text} block descriptor (plus id for updates)."""
  properties: dict[str, Any] = {}
  required: list[str] = []
  if with_id:
    properties["id"] = {
      "type": "string",
      "description": "The ID of the block to update",
    }
    required.append("id")
  properties["type"] = {
    "type": "string",
    "enum": supported_types(),
    "description": "Type of the block",
  }
  properties["text"] = {
    "type": "string",
    "description": text_description,
  }
  required.extend(["type", "text"])
  return {
    "type": "object",
    "description": "Attributes for each block update." if with_id else "Attributes for each content block.",
    "properties": properties,
    "required": required,
  }


NOTION_RETRIEVE_BLOCK_CONTENT = ToolDefinition(
  name="notion_retrieve_block_content",
  description="Retrieve the child blocks of a block or page in Notion.",
  parameters={
    "type": "object",
    "properties": {
      "block_id": {
        "type": "string",
        "description": "The ID of the block or page to retrieve",
      },
    },
    "required": ["block_id"],
  },
)

NOTION_UPDATE_BLOCK_CONTENT = ToolDefinition(
  name="notion_update_block_content",
  description=(
    "Update multiple block contents in Notion. Blocks are updated one by one; "
    "if one fails, blocks before it stay updated."
  ),
  parameters={
    "type": "object",
    "properties": {
      "block_updates": {
        "type": "array",
        "description": "An array of block updates. Each update includes block ID and new content.",
        "items": block_item_schema("New text content of the block", with_id=True),
      },
    },
    "required": ["block_updates"],
  },
)

NOTION_ADD_BLOCK_CONTENT = ToolDefinition(
  name="notion_add_block_content",
  description="Add new content blocks to a parent block or page in Notion.",
  parameters={
    "type": "object",
    "properties": {
      "parent_id": {
        "type": "string",
        "description": "The ID of the parent block or page to add content to",
      },
      "blocks": {
        "type": "array",
        "description": "An array of new content blocks to add. Each block can be a paragraph, heading, list, etc.",
        "items": block_item_schema("Text content of the block"),
      },
    },
    "required": ["parent_id", "blocks"],
  },
)

NOTION_DELETE_BLOCK_CONTENT = ToolDefinition(
  name="notion_delete_block_content",
  description="Delete a block in Notion by its ID.",
  parameters={
    "type": "object",
    "properties": {
      "block_id": {
        "type": "string",
        "description": "The ID of the block to delete",
      },
    },
    "required": ["block_id"],
  },
)
