"""
Setup Flow Types: Pydantic v2 Edition

Types for the interactive configuration wizard. Skills with
`has_setup=True` return these from their setup hooks and the runtime
serializes them for the host UI.

Usage:
    from dev.types.setup_types import SetupField, SetupStep, SetupResult
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class SetupField(BaseModel):
  """One input on a setup form."""

  model_config = ConfigDict(frozen=True)

  name: str = Field(description="Field key (unique within step)")
  type: Literal["text", "password", "boolean"]
  label: str = Field(description="Display label")
  description: str | None = None
  required: bool = True
  placeholder: str | None = None


class SetupStep(BaseModel):
  """A single form shown by the host."""

  model_config = ConfigDict(frozen=True)

  id: str
  title: str
  description: str | None = None
  fields: list[SetupField]

  def to_wire(self) -> dict[str, Any]:
    return {
      "id": self.id,
      "title": self.title,
      "description": self.description,
      "fields": [
        {
          "name": f.name,
          "type": f.type,
          "label": f.label,
          "description": f.description,
          "required": f.required,
          "placeholder": f.placeholder,
        }
        for f in self.fields
      ],
    }


class SetupFieldError(BaseModel):
  """A validation error attached to one field."""

  model_config = ConfigDict(frozen=True)

  field: str
  message: str


class SetupResult(BaseModel):
  """Outcome of a setup/submit call."""

  model_config = ConfigDict(frozen=True)

  status: Literal["next", "error", "complete"]
  next_step: SetupStep | None = None
  errors: list[SetupFieldError] | None = None
  message: str | None = None

  def to_wire(self) -> dict[str, Any]:
    return {
      "status": self.status,
      "nextStep": self.next_step.to_wire() if self.next_step else None,
      "errors": [{"field": e.field, "message": e.message} for e in self.errors]
      if self.errors
      else None,
      "message": self.message,
    }
