"""Tests for the skill lifecycle hooks and the JSON-RPC dispatch."""

import asyncio
import json

import pytest
from conftest import FakeWorkspaceClient

from dev.runtime.server import HostContext, HostLink, MethodNotFound, SkillServer
from skills.notion_workspace import client as client_module
from skills.notion_workspace import skill as skill_module
from skills.notion_workspace.config import CONFIG_FILE
from skills.notion_workspace.errors import ClientNotInitialized
from skills.notion_workspace.skill import skill


class _Ctx:
  def __init__(self, files=None):
    self.files = files or {}
    self.states = []
    self.data_dir = "/tmp/notion_workspace"

  async def read_data(self, filename):
    return self.files.get(filename, "")

  async def write_data(self, filename, content):
    self.files[filename] = content

  def log(self, message):
    pass

  def set_state(self, partial):
    self.states.append(partial)


@pytest.fixture
def patched_create(monkeypatch, fake_client):
  """Make build_client hand out the fake instead of a real AsyncClient."""
  tokens = []

  def _build(token):
    tokens.append(token)
    return fake_client

  monkeypatch.setattr(skill_module, "build_client", _build)
  monkeypatch.delenv("NOTION_TOKEN", raising=False)
  yield tokens
  client_module.set_client(None)


class TestLifecycle:
  def test_load_connects_with_stored_token(self, patched_create, fake_client):
    fake_client.responses["users.me"] = {"id": "bot-1", "name": "Helper"}
    ctx = _Ctx({CONFIG_FILE: json.dumps({"token": "ntn_stored"})})

    asyncio.run(skill.hooks.on_load(ctx))

    assert patched_create == ["ntn_stored"]
    assert ctx.states == [{"connected": True, "bot_name": "Helper", "bot_id": "bot-1"}]
    assert client_module.get_client() is fake_client

  def test_load_without_token_stays_disconnected(self, patched_create):
    ctx = _Ctx()

    asyncio.run(skill.hooks.on_load(ctx))

    assert patched_create == []
    assert ctx.states[0]["connected"] is False

  def test_load_with_rejected_token(self, patched_create, fake_client, api_error):
    fake_client.fail("users.me", api_error("unauthorized", 401))
    ctx = _Ctx({CONFIG_FILE: json.dumps({"token": "ntn_revoked"})})

    asyncio.run(skill.hooks.on_load(ctx))

    assert ctx.states == [{"connected": False, "error": "Token validation failed"}]
    assert fake_client.closed
    with pytest.raises(ClientNotInitialized):
      client_module.get_client()

  def test_reload_closes_previous_client(self, patched_create, fake_client):
    previous = FakeWorkspaceClient()
    client_module.set_client(previous)
    fake_client.responses["users.me"] = {"id": "bot-1", "name": "Helper"}
    ctx = _Ctx({CONFIG_FILE: json.dumps({"token": "ntn_stored"})})

    asyncio.run(skill.hooks.on_load(ctx))

    assert previous.closed
    assert client_module.get_client() is fake_client

  def test_status_without_client(self):
    status = asyncio.run(skill.hooks.on_status(_Ctx()))
    assert status["connected"] is False

  def test_status_and_unload(self, installed_client):
    installed_client.responses["users.me"] = {"id": "bot-1", "name": "Helper"}

    assert asyncio.run(skill.hooks.on_status(_Ctx()))["connected"] is True

    asyncio.run(skill.hooks.on_unload(_Ctx()))
    assert installed_client.closed
    assert asyncio.run(skill.hooks.on_status(_Ctx()))["connected"] is False


class TestServerDispatch:
  def test_tools_list_advertises_schemas(self):
    server = SkillServer(skill)

    result = asyncio.run(server._dispatch("tools/list", {}))

    tools = {t["name"]: t for t in result["tools"]}
    assert len(tools) == 10
    schema = tools["notion_delete_block_content"]["inputSchema"]
    assert schema["required"] == ["block_id"]
    assert schema["properties"]["block_id"]["type"] == "string"

  def test_tools_call_wraps_result(self, installed_client):
    server = SkillServer(skill)

    result = asyncio.run(
      server._dispatch(
        "tools/call", {"name": "notion_delete_block_content", "arguments": {"block_id": "b-1"}}
      )
    )

    assert result == {"content": [{"type": "text", "text": "true"}], "isError": False}

  def test_tools_call_reports_errors(self, installed_client, api_error):
    installed_client.fail("blocks.delete", api_error("object_not_found", 404))
    server = SkillServer(skill)

    result = asyncio.run(
      server._dispatch(
        "tools/call", {"name": "notion_delete_block_content", "arguments": {"block_id": "gone"}}
      )
    )

    assert result["isError"] is True

  def test_unknown_tool(self):
    server = SkillServer(skill)
    with pytest.raises(ValueError, match="Unknown tool"):
      asyncio.run(server._dispatch("tools/call", {"name": "nope"}))

  def test_unknown_method(self):
    server = SkillServer(skill)
    with pytest.raises(MethodNotFound):
      asyncio.run(server._dispatch("skill/frobnicate", {}))

  def test_setup_start(self):
    server = SkillServer(skill)
    result = asyncio.run(server._dispatch("setup/start", {}))
    assert result["step"]["id"] == "token"


class TestHostLink:
  """Reverse RPC from the skill to its host."""

  def _answering_link(self, answer):
    link = HostLink()
    sent = []

    def send(message):
      sent.append(message)
      if "method" in message:
        asyncio.get_running_loop().call_soon(link.settle, {"id": message["id"], **answer})

    link.send = send
    return link, sent

  def test_read_data_through_context(self):
    link, sent = self._answering_link({"result": {"content": "{}"}})

    content = asyncio.run(HostContext(link, "/data").read_data("config.json"))

    assert content == "{}"
    assert sent[0]["method"] == "data/read"
    assert sent[0]["params"] == {"filename": "config.json"}

  def test_host_error_is_raised(self):
    link, _ = self._answering_link({"error": {"message": "no such file"}})

    with pytest.raises(RuntimeError, match="no such file"):
      asyncio.run(link.request("data/read", {"filename": "missing.json"}))

  def test_request_ids_increase(self):
    link, sent = self._answering_link({"result": None})

    async def two_writes():
      await link.request("data/write", {"filename": "a", "content": ""})
      await link.request("data/write", {"filename": "b", "content": ""})

    asyncio.run(two_writes())

    assert [m["id"] for m in sent] == [1, 2]
