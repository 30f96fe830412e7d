"""
Workspace operations: one method per callable function.

Each method performs one logical Notion action through a WorkspaceClient and
returns the result serialized as JSON text: an array of workspace objects, a
single object, or `true`. Remote errors are translated into the skill error
taxonomy; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable

from pydantic import BaseModel, Field

from .blocks import BlockEdit, BlockSpec, BlockUpdate, decode_all
from .client import WorkspaceClient, get_client
from .errors import REMOTE_ERRORS, BlockUpdateFailed, NotionFunctionError, translate_error
from .helpers import find_title_property, make_rich_text, results_to_json

log = logging.getLogger("skill.notion_workspace.operations")

DEFAULT_TITLE = "Untitled"

DATABASE_FILTER = {"property": "object", "value": "database"}
PAGE_FILTER = {"property": "object", "value": "page"}


class PageDraft(BaseModel):
  """Title and ordered content of a page to create."""

  title: str | None = None
  content: list[BlockSpec] = Field(default_factory=list)


async def _request(label: str, call: Awaitable[Any]) -> Any:
  log.debug("Notion %s", label)
  try:
    return await call
  except REMOTE_ERRORS as e:
    log.debug("Notion %s failed: %s", label, e)
    raise translate_error(e) from e


class NotionOperations:
  """Stateless adapter between function calls and the Notion API."""

  def __init__(self, client: WorkspaceClient) -> None:
    self._client = client

  # -------------------------------------------------------------------------
  # Search & listing
  # -------------------------------------------------------------------------

  async def list_databases(self) -> str:
    response = await _request("search", self._client.search(filter=DATABASE_FILTER))
    return results_to_json(response.get("results", []))

  async def list_pages(self) -> str:
    response = await _request("search", self._client.search(filter=PAGE_FILTER))
    return results_to_json(response.get("results", []))

  async def search_pages(self, query: str) -> str:
    """Pages whose title matches `query`."""
    response = await _request(
      "search", self._client.search(query=query, filter=PAGE_FILTER)
    )
    return results_to_json(response.get("results", []))

  # -------------------------------------------------------------------------
  # Databases & pages
  # -------------------------------------------------------------------------

  async def get_database(self, database_id: str) -> str:
    database = await _request(
      "databases.retrieve", self._client.databases.retrieve(database_id=database_id)
    )
    return results_to_json(database)

  async def create_page(self, parent_id: str, draft: PageDraft) -> str:
    """Create a page under `parent_id` with the draft's blocks attached.

    All blocks are decoded before Notion is contacted, so an unsupported
    block type never leaves a half-built page behind.
    """
    children = [block.to_notion() for block in decode_all(draft.content)]
    title = draft.title if draft.title is not None else DEFAULT_TITLE

    page = await _request(
      "pages.create",
      self._client.pages.create(
        parent={"page_id": parent_id},
        properties={"title": {"title": make_rich_text(title)}},
        children=children,
      ),
    )
    log.info("Created page %s with %d block(s)", page.get("id", ""), len(children))
    return results_to_json(page)

  async def update_page_title(self, page_id: str, new_title: str) -> str:
    page = await _request("pages.retrieve", self._client.pages.retrieve(page_id=page_id))
    title_key = find_title_property(page)
    updated = await _request(
      "pages.update",
      self._client.pages.update(
        page_id=page_id,
        properties={title_key: {"title": make_rich_text(new_title)}},
      ),
    )
    return results_to_json(updated)

  # -------------------------------------------------------------------------
  # Blocks
  # -------------------------------------------------------------------------

  async def retrieve_block_content(self, block_id: str) -> str:
    """Direct children of a block or page (first result page only)."""
    response = await _request(
      "blocks.children.list", self._client.blocks.children.list(block_id=block_id)
    )
    return results_to_json(response.get("results", []))

  async def update_block_content(self, edits: list[BlockEdit]) -> str:
    """Replace blocks one at a time, in order.

    Notion has no multi-block update, so this is not atomic: when entry N
    fails, entries before it stay applied. The raised BlockUpdateFailed
    lists their ids.
    """
    applied: list[str] = []
    for index, edit in enumerate(edits):
      try:
        update = BlockUpdate.from_edit(edit)
        await _request(
          "blocks.update",
          self._client.blocks.update(block_id=update.id, **update.block.to_update()),
        )
      except NotionFunctionError as e:
        if applied:
          log.warning("Block update aborted at entry %d; already applied: %s", index, applied)
        raise BlockUpdateFailed(index, edit.id, applied, e) from e
      applied.append(update.id)
    return results_to_json(True)

  async def add_block_content(self, parent_id: str, specs: list[BlockSpec]) -> str:
    """Append all blocks to `parent_id` in a single call."""
    children = [block.to_notion() for block in decode_all(specs)]
    await _request(
      "blocks.children.append",
      self._client.blocks.children.append(block_id=parent_id, children=children),
    )
    return results_to_json(True)

  async def delete_block_content(self, block_id: str) -> str:
    await _request("blocks.delete", self._client.blocks.delete(block_id=block_id))
    return results_to_json(True)


def get_operations() -> NotionOperations:
  """Operations bound to the skill's current Notion client."""
  return NotionOperations(get_client())
