"""
Notion workspace tool definitions organized by domain.

Each module exports ToolDefinition objects that are combined into ALL_TOOLS.
"""

from __future__ import annotations

from dev.types.skill_types import ToolDefinition

from .blocks import (
  NOTION_ADD_BLOCK_CONTENT,
  NOTION_DELETE_BLOCK_CONTENT,
  NOTION_RETRIEVE_BLOCK_CONTENT,
  NOTION_UPDATE_BLOCK_CONTENT,
)
from .databases import NOTION_GET_DATABASE
from .pages import NOTION_CREATE_PAGE, NOTION_UPDATE_PAGE_TITLE
from .search import NOTION_LIST_DATABASES, NOTION_LIST_PAGES, NOTION_SEARCH_PAGES

ALL_TOOLS: list[ToolDefinition] = [
  # Listing & databases
  NOTION_LIST_DATABASES,
  NOTION_LIST_PAGES,
  NOTION_GET_DATABASE,
  # Pages
  NOTION_CREATE_PAGE,
  NOTION_UPDATE_PAGE_TITLE,
  NOTION_SEARCH_PAGES,
  # Blocks
  NOTION_RETRIEVE_BLOCK_CONTENT,
  NOTION_UPDATE_BLOCK_CONTENT,
  NOTION_ADD_BLOCK_CONTENT,
  NOTION_DELETE_BLOCK_CONTENT,
]

__all__ = ["ALL_TOOLS"]
