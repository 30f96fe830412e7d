"""
Database tools (1 tool).
"""

from __future__ import annotations

from dev.types.skill_types import ToolDefinition

NOTION_GET_DATABASE = ToolDefinition(
  name="notion_get_database",
  description="Retrieve details of the specified database in the Notion workspace.",
  parameters={
    "type": "object",
    "properties": {
      "database_id": {
        "type": "string",
        "description": "The ID of the database to retrieve",
      },
    },
    "required": ["database_id"],
  },
)
