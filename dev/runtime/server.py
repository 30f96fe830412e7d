"""
Python Runtime SDK: asyncio JSON-RPC 2.0 Server for Runtime Skills

Runtime skills use this as their entry point. The SDK handles:
- Reading JSON-RPC requests from stdin
- Dispatching to tool handlers, lifecycle hooks and the setup flow
- Writing JSON-RPC responses to stdout
- Reverse RPC to the host for state and data files

Usage:
    from dev.runtime.server import SkillServer
    from dev.types.skill_types import SkillDefinition

    server = SkillServer(skill_definition)
    server.start()
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
  from dev.types.skill_types import SkillDefinition, SkillTool

log = logging.getLogger("skill.runtime")

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603
REVERSE_RPC_TIMEOUT = 30.0


class MethodNotFound(LookupError):
  """The host called a JSON-RPC method this server does not implement."""


class HostLink:
  """Outbound half of the connection: replies and skill-to-host requests.

  Before a stdout writer is attached, messages go straight to sys.stdout.
  """

  def __init__(self) -> None:
    self.writer: asyncio.StreamWriter | None = None
    self._ids = itertools.count(1)
    self._waiting: dict[int | str, asyncio.Future[Any]] = {}

  def send(self, message: dict[str, Any]) -> None:
    line = json.dumps({"jsonrpc": "2.0", **message}) + "\n"
    if self.writer is None:
      sys.stdout.write(line)
      sys.stdout.flush()
    else:
      self.writer.write(line.encode())

  def reply(self, msg_id: int | str, result: Any) -> None:
    self.send({"id": msg_id, "result": result})

  def reply_error(self, msg_id: int | str, code: int, message: str) -> None:
    self.send({"id": msg_id, "error": {"code": code, "message": message}})

  async def request(self, method: str, params: dict[str, Any]) -> Any:
    """Call the host and wait for its answer."""
    msg_id = next(self._ids)
    answer = asyncio.get_running_loop().create_future()
    self._waiting[msg_id] = answer
    self.send({"id": msg_id, "method": method, "params": params})
    try:
      return await asyncio.wait_for(answer, timeout=REVERSE_RPC_TIMEOUT)
    except asyncio.TimeoutError:
      raise RuntimeError(f"Reverse RPC timeout: {method}") from None
    finally:
      self._waiting.pop(msg_id, None)

  def settle(self, message: dict[str, Any]) -> None:
    """Hand a host response to the request waiting on its id."""
    answer = self._waiting.pop(message.get("id"), None)
    if answer is None or answer.done():
      return
    if "error" in message:
      answer.set_exception(RuntimeError(message["error"].get("message", "Reverse RPC error")))
    else:
      answer.set_result(message.get("result"))


class HostContext:
  """SkillContext handed to hooks; file and state access go through the host."""

  def __init__(self, link: HostLink, data_dir: str) -> None:
    self._link = link
    self.data_dir = data_dir

  async def read_data(self, filename: str) -> str:
    result = await self._link.request("data/read", {"filename": filename})
    return result["content"] if isinstance(result, dict) else str(result)

  async def write_data(self, filename: str, content: str) -> None:
    await self._link.request("data/write", {"filename": filename, "content": content})

  def log(self, message: str) -> None:
    log.info(message)

  def set_state(self, partial: dict[str, Any]) -> None:
    # Not awaited: hooks call this synchronously
    _ = asyncio.ensure_future(self._link.request("state/set", {"partial": partial}))  # noqa: RUF006


class SkillServer:
  """JSON-RPC 2.0 server that bridges a Python skill to its host."""

  def __init__(self, skill: SkillDefinition) -> None:
    self._tools: dict[str, SkillTool] = {t.definition.name: t for t in skill.tools}
    self._hooks = skill.hooks
    self._skill = skill
    self._data_dir = ""
    self._link = HostLink()

  def start(self) -> None:
    """Start the server (blocking). Reads stdin, dispatches, writes stdout."""
    asyncio.run(self._run())

  # --------------------------------------------------------------------- #
  # Internal: main loop
  # --------------------------------------------------------------------- #

  async def _run(self) -> None:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    transport, _ = await loop.connect_write_pipe(asyncio.BaseProtocol, sys.stdout)
    self._link.writer = asyncio.StreamWriter(transport, protocol, reader, loop)

    async for raw in reader:
      line = raw.decode().strip()
      if not line:
        continue
      try:
        message = json.loads(line)
      except json.JSONDecodeError:
        log.warning("Dropping unparseable message: %s", line)
        continue

      # Host answers are settled inline so stdin keeps flowing while hooks wait on them
      if "result" in message or "error" in message:
        self._link.settle(message)
      else:
        _ = asyncio.create_task(self._handle_message(message))  # noqa: RUF006

  # --------------------------------------------------------------------- #
  # Internal: message dispatch
  # --------------------------------------------------------------------- #

  async def _handle_message(self, message: dict[str, Any]) -> None:
    msg_id = message.get("id")
    try:
      result = await self._dispatch(message.get("method", ""), message.get("params"))
    except MethodNotFound as exc:
      code, error = METHOD_NOT_FOUND, exc
    except Exception as exc:
      code, error = INTERNAL_ERROR, exc
    else:
      if msg_id is not None:
        self._link.reply(msg_id, result)
      return

    if msg_id is None:
      log.error("Notification handler error: %s", error)
    else:
      self._link.reply_error(msg_id, code, str(error))

  async def _dispatch(self, method: str, params: Any) -> Any:
    route = self._routes.get(method)
    if route is None:
      raise MethodNotFound(f"Method not found: {method}")
    return await route(self, params if isinstance(params, dict) else {})

  def _hook(self, name: str) -> Any:
    return getattr(self._hooks, name, None) if self._hooks else None

  def _create_context(self) -> HostContext:
    return HostContext(self._link, self._data_dir or f"skills/{self._skill.name}/data")

  # --------------------------------------------------------------------- #
  # Methods: tools
  # --------------------------------------------------------------------- #

  async def _tools_list(self, p: dict[str, Any]) -> dict[str, Any]:
    tools = [
      {"name": d.name, "description": d.description, "inputSchema": d.input_schema()}
      for d in self._skill.tool_definitions()
    ]
    return {"tools": tools}

  async def _tools_call(self, p: dict[str, Any]) -> dict[str, Any]:
    name = p.get("name", "")
    tool = self._tools.get(name)
    if tool is None:
      raise ValueError(f"Unknown tool: {name}")
    result = await tool.execute(p.get("arguments") or {})
    return {"content": [{"type": "text", "text": result.content}], "isError": result.is_error}

  # --------------------------------------------------------------------- #
  # Methods: lifecycle
  # --------------------------------------------------------------------- #

  async def _skill_load(self, p: dict[str, Any]) -> dict[str, Any]:
    self._data_dir = p.get("dataDir") or self._data_dir
    on_load = self._hook("on_load")
    if on_load:
      await on_load(self._create_context())
    return {"ok": True}

  async def _skill_unload(self, p: dict[str, Any]) -> dict[str, Any]:
    on_unload = self._hook("on_unload")
    if on_unload:
      await on_unload(self._create_context())
    return {"ok": True}

  async def _skill_status(self, p: dict[str, Any]) -> dict[str, Any]:
    on_status = self._hook("on_status")
    if not on_status:
      raise ValueError("Skill must implement on_status hook")
    return {"status": await on_status(self._create_context())}

  async def _skill_shutdown(self, p: dict[str, Any]) -> dict[str, Any]:
    # Let the reply flush before the process exits
    asyncio.get_running_loop().call_later(0.1, lambda: sys.exit(0))
    return {"ok": True}

  # --------------------------------------------------------------------- #
  # Methods: setup flow
  # --------------------------------------------------------------------- #

  def _setup_hook(self, name: str) -> Any:
    hook = self._hook(name)
    if not hook:
      raise ValueError("Skill does not implement setup flow")
    return hook

  async def _setup_start(self, p: dict[str, Any]) -> dict[str, Any]:
    step = await self._setup_hook("on_setup_start")(self._create_context())
    return {"step": step.to_wire()}

  async def _setup_submit(self, p: dict[str, Any]) -> dict[str, Any]:
    submit = self._setup_hook("on_setup_submit")
    outcome = await submit(self._create_context(), p.get("stepId", ""), p.get("values", {}))
    return outcome.to_wire()

  async def _setup_cancel(self, p: dict[str, Any]) -> dict[str, Any]:
    on_cancel = self._hook("on_setup_cancel")
    if on_cancel:
      await on_cancel(self._create_context())
    return {"ok": True}

  _routes: dict[str, Any] = {
    "tools/list": _tools_list,
    "tools/call": _tools_call,
    "skill/load": _skill_load,
    "skill/unload": _skill_unload,
    "skill/status": _skill_status,
    "skill/shutdown": _skill_shutdown,
    "setup/start": _setup_start,
    "setup/submit": _setup_submit,
    "setup/cancel": _setup_cancel,
  }
