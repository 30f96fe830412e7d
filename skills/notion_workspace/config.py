"""
Integration config for the Notion workspace skill.

The setup flow writes `config.json` into the skill data directory. When it
holds no token, the NOTION_TOKEN environment variable is used instead.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

log = logging.getLogger("skill.notion_workspace.config")

CONFIG_FILE = "config.json"
TOKEN_ENV_VAR = "NOTION_TOKEN"


class BotUser(BaseModel):
  id: str = ""
  name: str = ""
  type: str = "bot"


class NotionConfig(BaseModel):
  token: str = ""
  workspace_name: str | None = None
  bot_user: BotUser | None = None

  def to_json(self) -> str:
    return self.model_dump_json(indent=2)


def parse_config(raw: str | None, environ: Mapping[str, str] | None = None) -> NotionConfig:
  """Parse config.json content, falling back to NOTION_TOKEN for the token."""
  env = os.environ if environ is None else environ
  config = NotionConfig()

  if raw and raw.strip():
    try:
      data: Any = json.loads(raw)
      if isinstance(data, dict):
        config = NotionConfig.model_validate(data)
      else:
        log.warning("%s is not a JSON object, ignoring it", CONFIG_FILE)
    except (json.JSONDecodeError, ValidationError):
      log.warning("Could not parse %s, ignoring it", CONFIG_FILE, exc_info=True)

  if not config.token:
    env_token = env.get(TOKEN_ENV_VAR, "").strip()
    if env_token:
      config = config.model_copy(update={"token": env_token})

  return config


async def load_config(ctx: Any) -> NotionConfig:
  """Read config.json through the host and parse it."""
  raw: str | None = None
  try:
    raw = await ctx.read_data(CONFIG_FILE)
  except Exception:
    # Missing file on first run; the host reports it as an RPC error
    log.debug("No %s available", CONFIG_FILE)
  return parse_config(raw)
