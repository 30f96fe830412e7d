"""
Search and listing tools (3 tools).
"""

from __future__ import annotations

from dev.types.skill_types import ToolDefinition

NOTION_LIST_DATABASES = ToolDefinition(
  name="notion_list_databases",
  description="List all databases in the connected Notion workspace.",
  parameters={
    "type": "object",
    "properties": {},
    "required": [],
  },
)

NOTION_LIST_PAGES = ToolDefinition(
  name="notion_list_pages",
  description="List all pages in the connected Notion workspace.",
  parameters={
    "type": "object",
    "properties": {},
    "required": [],
  },
)

NOTION_SEARCH_PAGES = ToolDefinition(
  name="notion_search_pages",
  description="Search pages in Notion by title.",
  parameters={
    "type": "object",
    "properties": {
      "query": {
        "type": "string",
        "description": "The search query",
      },
    },
    "required": ["query"],
  },
)
