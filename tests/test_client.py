"""Tests for the AsyncClient factory and the global client slot."""

import asyncio
import json

import httpx
import pytest

from skills.notion_workspace.client import (
  NOTION_VERSION,
  build_client,
  close_client,
  get_client,
  set_client,
)
from skills.notion_workspace.errors import ClientNotInitialized
from skills.notion_workspace.operations import NotionOperations


class TestBuildClient:
  def test_pins_api_version(self):
    client = build_client("ntn_x")
    try:
      assert NOTION_VERSION == "2022-06-28"
      assert client.options.notion_version == NOTION_VERSION
    finally:
      asyncio.run(client.aclose())

  def test_is_not_installed(self):
    client = build_client("ntn_x")
    try:
      with pytest.raises(ClientNotInitialized):
        get_client()
    finally:
      asyncio.run(client.aclose())

  def test_database_search_sent_with_pinned_version(self):
    requests = []

    def handler(request):
      requests.append(request)
      return httpx.Response(200, json={"object": "list", "results": []})

    async def run():
      client = build_client("ntn_x")
      client.client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
      try:
        return await NotionOperations(client).list_databases()
      finally:
        await client.aclose()

    assert json.loads(asyncio.run(run())) == []
    assert requests[0].headers["Notion-Version"] == "2022-06-28"
    assert json.loads(requests[0].content)["filter"] == {"property": "object", "value": "database"}


class TestCloseClient:
  def test_closes_and_clears(self, fake_client):
    set_client(fake_client)

    asyncio.run(close_client())

    assert fake_client.closed
    with pytest.raises(ClientNotInitialized):
      get_client()

  def test_noop_without_client(self):
    set_client(None)
    asyncio.run(close_client())
    with pytest.raises(ClientNotInitialized):
      get_client()
