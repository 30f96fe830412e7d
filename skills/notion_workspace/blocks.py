"""
Block codec: turns a (type, text) pair into a Notion content block.

Only flat text blocks are supported: each block carries a single plain-text
payload, no rich-text runs and no nested children.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from .errors import UnsupportedBlockType
from .helpers import make_rich_text

# Notion requires a language on code blocks
CODE_LANGUAGE = "plain text"


class BlockType(str, Enum):
  BULLETED_LIST_ITEM = "bulleted_list_item"
  CODE = "code"
  EQUATION = "equation"
  HEADING_1 = "heading_1"
  HEADING_2 = "heading_2"
  HEADING_3 = "heading_3"
  NUMBERED_LIST_ITEM = "numbered_list_item"
  PARAGRAPH = "paragraph"
  QUOTE = "quote"
  TO_DO = "to_do"
  TOGGLE = "toggle"


def _rich_text_body(text: str) -> dict[str, Any]:
  return {"rich_text": make_rich_text(text)}


def _code_body(text: str) -> dict[str, Any]:
  return {"rich_text": make_rich_text(text), "language": CODE_LANGUAGE}


def _equation_body(text: str) -> dict[str, Any]:
  return {"expression": text}


def _to_do_body(text: str) -> dict[str, Any]:
  return {"rich_text": make_rich_text(text), "checked": False}


_BODY_BUILDERS: dict[BlockType, Callable[[str], dict[str, Any]]] = {
  BlockType.BULLETED_LIST_ITEM: _rich_text_body,
  BlockType.CODE: _code_body,
  BlockType.EQUATION: _equation_body,
  BlockType.HEADING_1: _rich_text_body,
  BlockType.HEADING_2: _rich_text_body,
  BlockType.HEADING_3: _rich_text_body,
  BlockType.NUMBERED_LIST_ITEM: _rich_text_body,
  BlockType.PARAGRAPH: _rich_text_body,
  BlockType.QUOTE: _rich_text_body,
  BlockType.TO_DO: _to_do_body,
  BlockType.TOGGLE: _rich_text_body,
}

_BY_LITERAL: dict[str, BlockType] = {t.value: t for t in BlockType}


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


class Block(BaseModel):
  """A single flat content block."""

  model_config = ConfigDict(frozen=True)

  type: BlockType
  text: str

  def body(self) -> dict[str, Any]:
    return _BODY_BUILDERS[self.type](self.text)

  def to_notion(self) -> dict[str, Any]:
    """Block object as accepted by pages.create / blocks.children.append."""
    return {"object": "block", "type": self.type.value, self.type.value: self.body()}

  def to_update(self) -> dict[str, Any]:
    """Keyword body for blocks.update."""
    return {self.type.value: self.body()}


class BlockSpec(BaseModel):
  """A block as described by a tool caller."""

  type: str
  text: str

  def decode(self) -> Block:
    return decode(self.type, self.text)


class BlockEdit(BlockSpec):
  """A replacement for an existing block."""

  id: str


class BlockUpdate(BaseModel):
  """A decoded block bound to the id of the block it replaces."""

  model_config = ConfigDict(frozen=True)

  id: str
  block: Block

  @classmethod
  def from_edit(cls, edit: BlockEdit) -> BlockUpdate:
    return cls(id=edit.id, block=edit.decode())


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def decode(type_name: str, text: str) -> Block:
  """Build a Block from a type literal and its text.

  Raises UnsupportedBlockType for any literal outside supported_types().
  """
  block_type = _BY_LITERAL.get(type_name)
  if block_type is None:
    raise UnsupportedBlockType(type_name)
  return Block(type=block_type, text=text)


def decode_all(specs: list[BlockSpec]) -> list[Block]:
  """Decode every spec in order; the first unsupported type aborts."""
  return [spec.decode() for spec in specs]


def supported_types() -> list[str]:
  """The recognized block type literals, in declaration order."""
  return [t.value for t in BlockType]
