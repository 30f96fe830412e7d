"""
AsyncClient singleton wrapper for the Notion API.

Uses the `notion-client` package (https://github.com/ramnes/notion-sdk-py).
The client is built on skill load from the stored integration token and
installed only once the token has been validated.
Anything matching `WorkspaceClient` can stand in for it (tests use an
in-memory fake).
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from notion_client import AsyncClient

from .errors import ClientNotInitialized

log = logging.getLogger("skill.notion_workspace.client")

# Search filters and database payloads assume the pre data-source API
NOTION_VERSION = "2022-06-28"


@runtime_checkable
class WorkspaceClient(Protocol):
  """The slice of the AsyncClient surface the operations rely on.

  `databases` exposes `retrieve`; `pages` exposes `retrieve`, `create` and
  `update`; `blocks` exposes `update`, `delete` and `children.list` /
  `children.append`. All endpoint methods are coroutines taking keyword
  arguments and returning the decoded JSON body.
  """

  databases: Any
  pages: Any
  blocks: Any

  async def search(self, **kwargs: Any) -> Any: ...

  async def aclose(self) -> None: ...


_client: WorkspaceClient | None = None


def build_client(token: str) -> AsyncClient:
  """Create an AsyncClient pinned to NOTION_VERSION. Does not install it."""
  return AsyncClient(auth=token, notion_version=NOTION_VERSION)


def set_client(client: WorkspaceClient | None) -> None:
  """Install an already-built client (or clear it with None)."""
  global _client
  _client = client


def get_client() -> WorkspaceClient:
  """Return the global client. Raises if not yet created."""
  if _client is None:
    raise ClientNotInitialized()
  return _client


async def close_client() -> None:
  """Close the global client's connection pool and clear the reference."""
  global _client
  client, _client = _client, None
  if client is None:
    return
  await client.aclose()
  log.info("Notion client closed")
