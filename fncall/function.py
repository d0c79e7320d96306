#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Function Types

This module provides the function descriptor the LLM chooses from, the
per-call request, and the structured result extracted from the completion.
Descriptors use Pydantic for validation and schema generation.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from .config import ModelConfig


class FunctionDefinition(BaseModel):
    """A function the LLM may select: name, description and parameter schema."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_model(
        cls,
        name: str,
        description: Optional[str],
        input_model: Type[BaseModel],
    ) -> "FunctionDefinition":
        """Build a definition whose parameters are the JSON schema of a Pydantic model."""
        schema = input_model.model_json_schema()
        # The model title is noise for the LLM
        schema.pop("title", None)
        return cls(name=name, description=description, parameters=schema)

    def to_prompt_dict(self) -> Dict[str, Any]:
        """The descriptor exactly as it is shown to the model."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


@dataclass
class FunctionCallRequest:
    """One function, the user's context and the model to ask."""
    function: FunctionDefinition
    user_context: str
    model_config: ModelConfig


@dataclass(frozen=True)
class FunctionCallResult:
    """The function the model picked and its arguments as a compact JSON object string."""
    name: str
    arguments: str = "{}"

    def parsed_arguments(self) -> Dict[str, Any]:
        return json.loads(self.arguments)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}
