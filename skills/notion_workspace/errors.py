"""
Error taxonomy for the Notion workspace skill.

Every failure a tool can hit is one of these. Remote errors raised by
`notion-client` (or its `httpx` transport) are translated at the call site
by `translate_error` so handlers only ever see this hierarchy.
"""

from __future__ import annotations

from typing import Any

import httpx
from notion_client import APIResponseError
from notion_client.errors import HTTPResponseError, RequestTimeoutError

# Exceptions the SDK and its transport raise for remote-side failures
REMOTE_ERRORS = (APIResponseError, HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


class NotionFunctionError(Exception):
  """Base class for all skill errors."""


class ClientNotInitialized(NotionFunctionError):
  def __init__(self) -> None:
    super().__init__("Notion client not initialized; run setup or set NOTION_TOKEN")


class UnsupportedBlockType(NotionFunctionError):
  """A block type literal outside the recognized set."""

  def __init__(self, type_name: str) -> None:
    self.type_name = type_name
    super().__init__(f"Unsupported block type: {type_name}")


class RemoteFailure(NotionFunctionError):
  """Any failure reported by the Notion API or its transport."""

  def __init__(self, message: str, code: str | None = None, status: int | None = None) -> None:
    self.code = code
    self.status = status
    super().__init__(message)


class NotFound(RemoteFailure):
  """The target page, database or block does not exist (or is not shared)."""


class BlockUpdateFailed(NotionFunctionError):
  """A multi-block update stopped part way through.

  Entries before `index` were already written to Notion and are not rolled
  back; their ids are listed in `applied`.
  """

  def __init__(
    self,
    index: int,
    block_id: str,
    applied: list[str],
    cause: NotionFunctionError,
  ) -> None:
    self.index = index
    self.block_id = block_id
    self.applied = list(applied)
    self.cause = cause
    super().__init__(
      f"Update of entry {index} (block {block_id}) failed: {cause}. "
      f"Already applied: {', '.join(self.applied) or 'none'}"
    )


def _code_of(error: Any) -> str | None:
  code = getattr(error, "code", None)
  if code is None:
    return None
  # APIErrorCode is a str enum
  return getattr(code, "value", str(code))


def translate_error(error: Exception) -> NotionFunctionError:
  """Map one of REMOTE_ERRORS onto the skill taxonomy."""
  if isinstance(error, APIResponseError):
    code = _code_of(error)
    status = getattr(error, "status", None)
    if code == "object_not_found" or status == 404:
      return NotFound(str(error), code=code, status=status)
    return RemoteFailure(str(error), code=code, status=status)

  if isinstance(error, RequestTimeoutError):
    return RemoteFailure(f"Request to Notion timed out: {error}", code="timeout")

  if isinstance(error, HTTPResponseError):
    status = getattr(error, "status", None)
    if status == 404:
      return NotFound(str(error), status=status)
    return RemoteFailure(str(error), status=status)

  if isinstance(error, httpx.HTTPError):
    return RemoteFailure(f"Could not reach Notion: {error}", code="transport_error")

  return RemoteFailure(str(error))
