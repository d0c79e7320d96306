#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Prompt Builder

Renders a function descriptor and the user's context into the two-message
prompt consumed by the router.
"""

import json
import logging
from dataclasses import dataclass

from .errors import ConfigFailure
from .function import FunctionDefinition
from .prompts import FUNCTION_CALL_SYSTEM_PROMPT

# Set up logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionCallPrompt:
    """System instruction plus the per-call JSON payload."""
    system: str
    user: str


def build_user_prompt(function: FunctionDefinition, user_context: str) -> str:
    """
    Render the function descriptor and user context as pretty-printed JSON.

    Args:
        function: The function the model may call
        user_context: The user's natural-language request

    Returns:
        The user message text

    Raises:
        ConfigFailure: if the payload holds data that cannot be represented as UTF-8 JSON
    """
    prompt_data = {
        "function": function.to_prompt_dict(),
        "user_context": user_context,
    }
    try:
        prompt = json.dumps(prompt_data, indent=2, ensure_ascii=False)
        # Lone surrogates survive json.dumps but cannot be sent over the wire
        prompt.encode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to convert prompt for function {function.name} to JSON: {str(e)}")
        raise ConfigFailure(f"Failed to convert prompt to JSON: {str(e)}", function_name=function.name) from e
    return prompt


def build_function_call_prompt(function: FunctionDefinition, user_context: str) -> FunctionCallPrompt:
    """Pair the fixed function-call instruction with the rendered payload."""
    return FunctionCallPrompt(
        system=FUNCTION_CALL_SYSTEM_PROMPT,
        user=build_user_prompt(function, user_context),
    )
