"""Tests for the tool handlers and dispatch table."""

import asyncio
import json

from skills.notion_workspace.handlers import DISPATCH, dispatch_tool


def call(name, args):
  return asyncio.run(dispatch_tool(name, args))


class TestDispatch:
  """Tests for dispatch_tool()."""

  def test_unknown_tool(self):
    result = call("notion_frobnicate", {})
    assert result.is_error
    assert result.content == "Unknown tool: notion_frobnicate"

  def test_dispatch_table_has_every_operation(self):
    assert set(DISPATCH) == {
      "notion_list_databases",
      "notion_list_pages",
      "notion_get_database",
      "notion_create_page",
      "notion_update_page_title",
      "notion_search_pages",
      "notion_retrieve_block_content",
      "notion_update_block_content",
      "notion_add_block_content",
      "notion_delete_block_content",
    }

  def test_client_not_initialized(self):
    result = call("notion_list_pages", {})
    assert result.is_error
    assert "not initialized" in result.content


class TestArgumentChecks:
  """Required arguments are checked before Notion is contacted."""

  def test_get_database_requires_id(self, installed_client):
    result = call("notion_get_database", {})
    assert result.is_error
    assert result.content == "database_id is required"
    assert installed_client.calls == []

  def test_search_pages_requires_query(self, installed_client):
    result = call("notion_search_pages", {})
    assert result.content == "query is required"

  def test_update_page_title_requires_new_title(self, installed_client):
    result = call("notion_update_page_title", {"page_id": "p-1"})
    assert result.content == "new_title is required"

  def test_add_block_content_requires_parent(self, installed_client):
    result = call("notion_add_block_content", {"blocks": []})
    assert result.content == "parent_id is required"

  def test_update_block_content_requires_array(self, installed_client):
    result = call("notion_update_block_content", {})
    assert result.content == "block_updates array is required"

  def test_malformed_block_descriptor(self, installed_client, caplog):
    result = call("notion_add_block_content", {"parent_id": "p-1", "blocks": [{"type": "paragraph"}]})
    assert result.is_error
    assert result.content.startswith("Invalid blocks:")
    assert "text" in result.content
    assert installed_client.calls == []
    assert "Rejected blocks for p-1" in caplog.text

  def test_malformed_page_data(self, installed_client):
    result = call("notion_create_page", {"parent_id": "p-1", "data": {"content": "not a list"}})
    assert result.is_error
    assert result.content.startswith("Invalid data:")


class TestResults:
  """Successful calls return JSON text."""

  def test_create_page_without_data_is_untitled(self, installed_client):
    installed_client.responses["pages.create"] = {"object": "page", "id": "new"}

    result = call("notion_create_page", {"parent_id": "p-1"})

    assert not result.is_error
    assert json.loads(result.content) == {"object": "page", "id": "new"}
    (kwargs,) = installed_client.calls_to("pages.create")
    assert kwargs["properties"]["title"]["title"][0]["text"]["content"] == "Untitled"

  def test_add_block_content_returns_true(self, installed_client):
    result = call(
      "notion_add_block_content",
      {"parent_id": "p-1", "blocks": [{"type": "paragraph", "text": "Hi"}]},
    )
    assert not result.is_error
    assert result.content == "true"

  def test_list_databases(self, installed_client):
    installed_client.responses["search"] = {"results": [{"id": "db-1"}]}
    result = call("notion_list_databases", {})
    assert json.loads(result.content) == [{"id": "db-1"}]


class TestErrors:
  """Failures come back as error results."""

  def test_unsupported_block_type(self, installed_client):
    result = call(
      "notion_create_page",
      {"parent_id": "p-1", "data": {"title": "T", "content": [{"type": "divider", "text": ""}]}},
    )
    assert result.is_error
    assert result.content == "Unsupported block type: divider"
    assert installed_client.calls == []

  def test_not_found(self, installed_client, api_error):
    installed_client.fail("blocks.delete", api_error("object_not_found", 404))

    result = call("notion_delete_block_content", {"block_id": "missing"})

    assert result.is_error
    assert result.content.startswith("Not found.")
    assert result.content != "true"

  def test_unauthorized(self, installed_client, api_error):
    installed_client.fail("search", api_error("unauthorized", 401))

    result = call("notion_list_pages", {})

    assert result.is_error
    assert result.content.startswith("Unauthorized.")

  def test_partial_update_reports_applied_blocks(self, installed_client):
    result = call(
      "notion_update_block_content",
      {
        "block_updates": [
          {"id": "a", "type": "paragraph", "text": "ok"},
          {"id": "b", "type": "image", "text": "bad"},
          {"id": "c", "type": "paragraph", "text": "never"},
        ]
      },
    )

    assert result.is_error
    assert "entry 1 (block b)" in result.content
    assert "Unsupported block type: image" in result.content
    assert "not rolled back): a" in result.content
    assert [c["block_id"] for c in installed_client.calls_to("blocks.update")] == ["a"]
