#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Extraction

Recovers a structured function call from raw model output.

Models often wrap the JSON in commentary, so everything from the first "{"
to the last "}" is parsed as the call. Unmatched braces in the surrounding
prose break this; it is not a general JSON-in-text scanner.
"""

import json
from typing import Any

from .errors import ParseFailure
from .function import FunctionCallResult


def _normalize_name(raw: Any) -> str:
    if isinstance(raw, str):
        # Tolerate a name that was re-serialized as a quoted JSON string
        return raw.strip('"')
    return json.dumps(raw, ensure_ascii=False)


def _normalize_arguments(raw: Any) -> str:
    if raw is None:
        return "{}"
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise ParseFailure(f"'arguments' is a string but not valid JSON: {str(e)}") from e
    if not isinstance(raw, dict):
        raise ParseFailure(f"'arguments' must be a JSON object, got {type(raw).__name__}")
    return json.dumps(raw, separators=(",", ":"), ensure_ascii=False)


def extract_function_call(text: str) -> FunctionCallResult:
    """
    Parse a completion into a FunctionCallResult.

    Args:
        text: Raw completion text

    Returns:
        The function name and its arguments as a compact JSON object string

    Raises:
        ParseFailure: no JSON found, undecodable JSON, or no "name" key
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1:
        raise ParseFailure("No valid JSON found in the string")

    json_str = text[start:end + 1]
    try:
        value = json.loads(json_str)
    except (ValueError, RecursionError) as e:
        # Deep nesting and oversized integer literals fail outside JSONDecodeError
        raise ParseFailure(f"Invalid JSON in completion: {str(e)}") from e

    if not isinstance(value, dict) or "name" not in value:
        raise ParseFailure("No 'name' property found in the JSON")

    return FunctionCallResult(
        name=_normalize_name(value["name"]),
        arguments=_normalize_arguments(value.get("arguments")),
    )
