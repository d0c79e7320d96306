#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Errors

Typed failures raised by every stage of the function-call pipeline.

ParseFailure    - the model output holds no usable JSON function call
ProviderFailure - the backend adapter or its transport failed
ConfigFailure   - unknown model, malformed stored data, bad caller input
"""

from typing import Any, Dict, Optional


class DispatchError(Exception):
    """Base class for all function-call dispatch errors."""

    error_code = "DISPATCH_ERROR"
    recoverable = True

    def __init__(self, message: str, function_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.function_name = function_name

    def __str__(self) -> str:
        if self.function_name:
            return f"{self.message} (function: {self.function_name})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "recoverable": self.recoverable,
            "function_name": self.function_name,
        }


class ParseFailure(DispatchError):
    """No JSON found in the completion, or the JSON lacks the required shape."""

    error_code = "PARSE_FAILURE"
    recoverable = True


class ProviderFailure(DispatchError):
    """Adapter or transport error while talking to a model provider."""

    error_code = "PROVIDER_FAILURE"
    recoverable = True

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        function_name: Optional[str] = None,
    ):
        super().__init__(message, function_name=function_name)
        self.provider = provider
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["provider"] = self.provider
        data["status_code"] = self.status_code
        return data


class ConfigFailure(DispatchError):
    """Caller or data bug: unknown model, unparsable identifiers or schema."""

    error_code = "CONFIG_FAILURE"
    recoverable = False
