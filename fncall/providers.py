#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Provider Adapters

This module classifies model identifiers into provider families and provides
one adapter per family. Every adapter talks to its provider through litellm:

1. Anthropic-style single instruction API
2. OpenAI chat-message API
3. OpenAI-compatible self-hosted servers reachable by URL
"""

import os
import json
import logging
import datetime
import pathlib
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import litellm

from .config import call_log_enabled, get_default_model_url
from .errors import ProviderFailure

# Set up logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


class ProviderFamily(str, Enum):
    """Enum for the supported provider families"""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OPEN_SOURCE = "open_source"
    UNKNOWN = "unknown"


def classify_model(model_name: str) -> ProviderFamily:
    """
    Map a model identifier to its provider family. First match wins.

    Args:
        model_name: Model identifier, e.g. "claude-2.1", "gpt-4" or "mistralai/mixtral-8x7b-instruct"

    Returns:
        The provider family, UNKNOWN when nothing matches
    """
    if "claude" in model_name:
        return ProviderFamily.ANTHROPIC
    if "gpt" in model_name:
        return ProviderFamily.OPENAI
    if "/" in model_name:
        return ProviderFamily.OPEN_SOURCE
    return ProviderFamily.UNKNOWN


def strip_namespace(model_name: str) -> str:
    """Drop the "vendor/" prefix of a namespaced open model identifier."""
    return model_name.split("/")[-1]


def to_api_base(url: str) -> str:
    """Reduce a full chat-completions URL to the API base litellm expects."""
    base = url.rstrip("/")
    suffix = "/chat/completions"
    if base.endswith(suffix):
        base = base[: -len(suffix)]
    return base


@dataclass
class AdapterRequest:
    """A provider-ready request produced by the router."""
    provider: ProviderFamily
    model: str
    messages: List[Dict[str, str]]
    max_tokens: int
    temperature: Optional[float] = None
    stop_sequences: Optional[List[str]] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    metadata: Optional[Dict[str, str]] = None
    api_base: Optional[str] = None
    timeout: Optional[float] = None
    # What the token budget was computed on
    rendered_prompt: str = ""
    estimated_tokens: int = 0


class BackendAdapter:
    """Base adapter: sends an AdapterRequest through litellm and unwraps the completion."""

    provider = ProviderFamily.UNKNOWN

    def __init__(self):
        self.tmp_folder = os.getenv("TMP_FOLDER", "tmp")
        self.llm_folder = os.getenv("TMP_LLM_FOLDER", "llm")
        self.log_base_path = pathlib.Path(self.tmp_folder) / self.llm_folder

    def frame(self, system_prompt: str, user_prompt: str) -> Tuple[List[Dict[str, str]], str]:
        """
        Render the prompt in this provider's native shape.

        Returns:
            The messages to send and the exact text the token budget is computed on
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return messages, json.dumps(messages, separators=(",", ":"), ensure_ascii=False)

    def target(self, model_name: str, model_url: Optional[str]) -> Tuple[str, Optional[str]]:
        """Resolve the model name and endpoint to send to."""
        return model_name, None

    def build_params(self, request: AdapterRequest) -> Dict[str, Any]:
        """Translate the normalized request into litellm.completion keyword arguments."""
        params = {
            "model": request.model,
            "messages": request.messages,
            "max_tokens": request.max_tokens,
        }
        if request.temperature is not None:
            params["temperature"] = request.temperature
        if request.stop_sequences:
            params["stop"] = request.stop_sequences
        if request.top_p is not None:
            params["top_p"] = request.top_p
        if request.timeout is not None:
            params["timeout"] = request.timeout
        return params

    def complete(self, request: AdapterRequest) -> str:
        """
        Call the provider.

        Args:
            request: The routed request

        Returns:
            The primary completion text

        Raises:
            ProviderFailure: on any transport or protocol error
        """
        params = self.build_params(request)
        logger.info(f"Making LLM API call to {self.provider.value} with model {params['model']}")

        try:
            response = litellm.completion(**params)
        except Exception as e:
            logger.error(f"Error calling {self.provider.value} API: {str(e)}")
            raise ProviderFailure(
                f"Error calling {self.provider.value} API: {str(e)}",
                provider=self.provider.value,
                status_code=getattr(e, "status_code", None),
            ) from e

        content = self._extract_content(response)
        if call_log_enabled():
            self._log_llm_call(params["model"], params, content)
        return content

    def stream(self, request: AdapterRequest) -> Iterator[str]:
        """
        Call the provider in streaming mode.

        The request is sent before this returns, so connection and
        authentication errors are raised here rather than on first iteration.

        Returns:
            A generator of content deltas, in arrival order

        Raises:
            ProviderFailure: on any transport or protocol error, including mid-stream
        """
        params = self.build_params(request)
        params["stream"] = True
        logger.info(f"Making streaming LLM API call to {self.provider.value} with model {params['model']}")

        try:
            response = litellm.completion(**params)
        except Exception as e:
            logger.error(f"Error calling {self.provider.value} API: {str(e)}")
            raise ProviderFailure(
                f"Error calling {self.provider.value} API: {str(e)}",
                provider=self.provider.value,
                status_code=getattr(e, "status_code", None),
            ) from e

        return self._handle_streaming_response(response, params)

    def _handle_streaming_response(self, response: Any, params: Dict[str, Any]) -> Iterator[str]:
        collected_content = ""
        chunk_count = 0
        try:
            for chunk in response:
                chunk_count += 1
                choices = getattr(chunk, "choices", None)
                if not choices:
                    continue
                delta = getattr(choices[0], "delta", None)
                content = getattr(delta, "content", None) if delta is not None else None
                if content:
                    collected_content += content
                    yield content
        except Exception as e:
            logger.error(f"Error in stream processing: {str(e)}")
            raise ProviderFailure(
                f"Stream from {self.provider.value} API failed: {str(e)}",
                provider=self.provider.value,
                status_code=getattr(e, "status_code", None),
            ) from e

        logger.info(f"Stream complete. Collected {chunk_count} chunks")
        if call_log_enabled():
            self._log_llm_call(params["model"], params, collected_content)

    def _extract_content(self, response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise ProviderFailure(
                f"{self.provider.value} API returned no choices",
                provider=self.provider.value,
            )
        message = getattr(choices[0], "message", None)
        return (getattr(message, "content", None) or "") if message is not None else ""

    def _log_llm_call(self, model: str, params: Dict[str, Any], content: str) -> None:
        """Log an LLM call to a file under TMP_FOLDER/TMP_LLM_FOLDER."""
        try:
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")

            model_dir = self.log_base_path / f"{self.provider.value}_{model.replace('/', '_')}"
            model_dir.mkdir(parents=True, exist_ok=True)
            log_file_path = model_dir / f"{timestamp}.txt"

            log_content = {
                "timestamp": datetime.datetime.now().isoformat(),
                "provider": self.provider.value,
                "model": model,
                "params": {k: v for k, v in params.items() if k != "api_key"},
                "response": {"content": content},
            }

            with open(log_file_path, 'w', encoding='utf-8') as f:
                json.dump(log_content, f, indent=2, default=str)

            logger.info(f"LLM call logged to {log_file_path}")
        except OSError as e:
            logger.error(f"Error logging LLM call: {str(e)}")


class AnthropicAdapter(BackendAdapter):
    """Anthropic-style API: one instruction blob, supports top_k and metadata."""

    provider = ProviderFamily.ANTHROPIC

    def frame(self, system_prompt: str, user_prompt: str) -> Tuple[List[Dict[str, str]], str]:
        # No native multi-message format: system and user go into one instruction blob
        instructions = f"<system>\n{system_prompt}\n</system>\n<user>\n{user_prompt}\n</user>"
        return [{"role": "user", "content": instructions}], instructions

    def build_params(self, request: AdapterRequest) -> Dict[str, Any]:
        params = super().build_params(request)
        if "/" not in request.model:
            params["model"] = f"anthropic/{request.model}"
        if request.top_k is not None:
            params["top_k"] = request.top_k
        if request.metadata:
            params["metadata"] = request.metadata
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if api_key:
            params["api_key"] = api_key
        return params


class OpenAIAdapter(BackendAdapter):
    """OpenAI chat API with separate system and user messages."""

    provider = ProviderFamily.OPENAI

    def build_params(self, request: AdapterRequest) -> Dict[str, Any]:
        params = super().build_params(request)
        api_key = os.getenv("OPENAI_API_KEY")
        if api_key:
            params["api_key"] = api_key
        api_base = os.getenv("OPENAI_API_BASE")
        if api_base:
            params["api_base"] = api_base
        return params


class OpenAICompatibleAdapter(BackendAdapter):
    """Self-hosted or third-party server speaking the OpenAI chat protocol."""

    provider = ProviderFamily.OPEN_SOURCE

    def target(self, model_name: str, model_url: Optional[str]) -> Tuple[str, Optional[str]]:
        return strip_namespace(model_name), model_url or get_default_model_url()

    def build_params(self, request: AdapterRequest) -> Dict[str, Any]:
        params = super().build_params(request)
        # The openai/ prefix tells litellm to use the OpenAI protocol against api_base
        params["model"] = f"openai/{request.model}"
        if request.api_base:
            params["api_base"] = to_api_base(request.api_base)
        # Local servers usually ignore the key but the client requires one
        params["api_key"] = os.getenv("MODEL_API_KEY") or "EMPTY"
        return params


def default_adapters() -> Dict[ProviderFamily, BackendAdapter]:
    return {
        ProviderFamily.ANTHROPIC: AnthropicAdapter(),
        ProviderFamily.OPENAI: OpenAIAdapter(),
        ProviderFamily.OPEN_SOURCE: OpenAICompatibleAdapter(),
    }
