"""Shared fixtures: an in-memory stand-in for the Notion AsyncClient."""

from __future__ import annotations

from typing import Any, Callable

import pytest
from notion_client import APIResponseError

from skills.notion_workspace.client import set_client


def make_api_error(code: str, status: int, message: str = "Notion said no") -> APIResponseError:
  """Build an APIResponseError without going through an HTTP response."""
  err = APIResponseError.__new__(APIResponseError)
  Exception.__init__(err, message)
  err.code = code
  err.status = status
  return err


class _Endpoint:
  """Attribute access yields recording coroutines named `<prefix>.<attr>`."""

  def __init__(self, client: FakeWorkspaceClient, prefix: str) -> None:
    self._client = client
    self._prefix = prefix

  def __getattr__(self, name: str) -> Callable[..., Any]:
    method = f"{self._prefix}.{name}"

    async def call(**kwargs: Any) -> Any:
      return self._client.handle(method, kwargs)

    return call


class FakeWorkspaceClient:
  """Records every call; responses and failures are primed per method."""

  def __init__(self) -> None:
    self.calls: list[tuple[str, dict[str, Any]]] = []
    self.responses: dict[str, Any] = {}
    self._failures: list[tuple[str, Callable[[dict[str, Any]], bool], Exception]] = []
    self.databases = _Endpoint(self, "databases")
    self.pages = _Endpoint(self, "pages")
    self.blocks = _Endpoint(self, "blocks")
    self.blocks.children = _Endpoint(self, "blocks.children")
    self.users = _Endpoint(self, "users")
    self.closed = False

  async def search(self, **kwargs: Any) -> Any:
    return self.handle("search", kwargs)

  async def aclose(self) -> None:
    self.closed = True

  async def __aenter__(self) -> FakeWorkspaceClient:
    return self

  async def __aexit__(self, *exc_info: Any) -> None:
    await self.aclose()

  def fail(
    self,
    method: str,
    error: Exception,
    when: Callable[[dict[str, Any]], bool] = lambda kwargs: True,
  ) -> None:
    self._failures.append((method, when, error))

  def handle(self, method: str, kwargs: dict[str, Any]) -> Any:
    self.calls.append((method, kwargs))
    for failing, when, error in self._failures:
      if failing == method and when(kwargs):
        raise error
    response = self.responses.get(method)
    if callable(response):
      return response(kwargs)
    if response is not None:
      return response
    if method in ("search", "blocks.children.list", "blocks.children.append"):
      return {"object": "list", "results": []}
    return {"object": "unknown", "id": kwargs.get("page_id") or kwargs.get("block_id") or "new-id"}

  def methods(self) -> list[str]:
    return [method for method, _ in self.calls]

  def calls_to(self, method: str) -> list[dict[str, Any]]:
    return [kwargs for called, kwargs in self.calls if called == method]


@pytest.fixture
def fake_client() -> FakeWorkspaceClient:
  return FakeWorkspaceClient()


@pytest.fixture
def installed_client(fake_client: FakeWorkspaceClient):
  """Install the fake as the skill's global client for handler tests."""
  set_client(fake_client)
  yield fake_client
  set_client(None)


@pytest.fixture
def api_error() -> Callable[..., APIResponseError]:
  return make_api_error
