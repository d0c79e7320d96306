#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Configuration

Environment-backed settings and the per-call ModelConfig.
"""

import os
import dataclasses
from dataclasses import dataclass
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .errors import ConfigFailure

# Load environment variables
load_dotenv()

# Sentinel for "compute max tokens from the remaining context budget"
AUTO_MAX_TOKENS = -1

DEFAULT_CONTEXT_SIZE = 4096
DEFAULT_MODEL_URL = "http://localhost:8000/v1/chat/completions"
DEFAULT_TOKENIZER_MODEL = "gpt-3.5-turbo"
DEFAULT_MAX_WORKERS = 4


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigFailure(f"Environment variable {name} must be an integer, got {value!r}")


def get_default_context_size() -> int:
    """Context window assumed when a call does not provide one."""
    return _int_from_env("DEFAULT_CONTEXT_SIZE", DEFAULT_CONTEXT_SIZE)


def get_default_model_url() -> str:
    """Endpoint for OpenAI-compatible self-hosted models."""
    return os.getenv("MODEL_URL") or DEFAULT_MODEL_URL


def get_tokenizer_model() -> str:
    return os.getenv("TOKENIZER_MODEL") or DEFAULT_TOKENIZER_MODEL


def get_max_workers() -> int:
    return _int_from_env("FUNCTION_CALL_MAX_WORKERS", DEFAULT_MAX_WORKERS)


def call_log_enabled() -> bool:
    return os.getenv("LLM_CALL_LOG", "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ModelConfig:
    """
    Identifies the target model and the generation parameters for one request.

    Attributes:
        model_name: Model identifier, e.g. "gpt-4", "claude-2.1" or "mistralai/mixtral-8x7b-instruct"
        model_url: Optional endpoint override for OpenAI-compatible servers
        user_prompt: The natural-language request
        temperature: Sampling temperature
        max_tokens_to_sample: Response budget, or -1 to compute it from the context window
        stop_sequences: Sequences that end generation
        top_p: Nucleus sampling parameter
        top_k: Top-k sampling parameter (Anthropic only)
        metadata: Free-form string metadata forwarded to the provider
        context_size: Context window used for the -1 budget computation (4096 when unset)
        timeout: Seconds before the provider call is abandoned
    """
    model_name: str
    model_url: Optional[str] = None
    user_prompt: str = ""
    temperature: Optional[float] = None
    max_tokens_to_sample: int = AUTO_MAX_TOKENS
    stop_sequences: Optional[List[str]] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    metadata: Optional[Dict[str, str]] = None
    context_size: Optional[int] = None
    timeout: Optional[float] = None

    # List and dict fields make a field-based hash unsafe
    __hash__ = None

    def __post_init__(self):
        if not self.model_name:
            raise ConfigFailure("model_name must not be empty")
        if self.max_tokens_to_sample != AUTO_MAX_TOKENS and self.max_tokens_to_sample <= 0:
            raise ConfigFailure(
                f"max_tokens_to_sample must be positive or {AUTO_MAX_TOKENS}, "
                f"got {self.max_tokens_to_sample}"
            )
        if self.context_size is not None and self.context_size <= 0:
            raise ConfigFailure(f"context_size must be positive, got {self.context_size}")
        # Copy mutable containers so the caller cannot change a config after construction
        if self.stop_sequences is not None:
            object.__setattr__(self, "stop_sequences", list(self.stop_sequences))
        if self.metadata is not None:
            object.__setattr__(self, "metadata", dict(self.metadata))

    @property
    def auto_max_tokens(self) -> bool:
        return self.max_tokens_to_sample == AUTO_MAX_TOKENS

    def clone(self, **overrides) -> "ModelConfig":
        """Return a copy of this config with the given fields replaced."""
        return dataclasses.replace(self, **overrides)
