"""
Page tools (2 tools).
"""

from __future__ import annotations

from dev.types.skill_types import ToolDefinition

from .blocks import block_item_schema

NOTION_CREATE_PAGE = ToolDefinition(
  name="notion_create_page",
  description="Create a new page in Notion.",
  parameters={
    "type": "object",
    "properties": {
      "parent_id": {
        "type": "string",
        "description": "The ID of the parent page where the new page will be created",
      },
      "data": {
        "type": "object",
        "description": "Data for creating a page.",
        "properties": {
          "title": {
            "type": "string",
            "description": "The title of the page (default: Untitled)",
          },
          "content": {
            "type": "array",
            "description": "Blocks of content to include in the page, in order.",
            "items": block_item_schema("Text content of the block"),
          },
        },
        "required": ["content"],
      },
    },
    "required": ["parent_id", "data"],
  },
)

NOTION_UPDATE_PAGE_TITLE = ToolDefinition(
  name="notion_update_page_title",
  description="Update the title of an existing page in Notion.",
  parameters={
    "type": "object",
    "properties": {
      "page_id": {
        "type": "string",
        "description": "The ID of the page to update",
      },
      "new_title": {
        "type": "string",
        "description": "The new title for the page",
      },
    },
    "required": ["page_id", "new_title"],
  },
)
