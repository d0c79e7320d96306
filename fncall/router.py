#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Model Router

This module picks the backend adapter for a model identifier, fills in the
response token budget when the caller asked for it to be computed, forwards
the call and returns the unwrapped completion text. Caller-supplied chat
message lists can also be streamed back as content deltas.
"""

import json
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .config import AUTO_MAX_TOKENS, ModelConfig, get_default_context_size
from .errors import ConfigFailure
from .providers import AdapterRequest, BackendAdapter, ProviderFamily, classify_model, default_adapters
from .tokens import TokenEstimator

# Set up logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


class ModelRouter:
    """Routes a completion request to the adapter matching the model identifier."""

    def __init__(
        self,
        adapters: Optional[Dict[ProviderFamily, BackendAdapter]] = None,
        token_estimator: Optional[TokenEstimator] = None,
        default_context_size: Optional[int] = None,
    ):
        """
        Initialize the router.

        Args:
            adapters: Adapter per provider family. Defaults to the litellm-backed adapters.
            token_estimator: Estimator used for the -1 token budget
            default_context_size: Context window used when a call does not give one.
                Defaults to DEFAULT_CONTEXT_SIZE from the environment, else 4096.
        """
        self.adapters = adapters if adapters is not None else default_adapters()
        self.token_estimator = token_estimator or TokenEstimator()
        self.default_context_size = default_context_size or get_default_context_size()

    def _adapter_for(self, model_name: str) -> Tuple[ProviderFamily, BackendAdapter]:
        family = classify_model(model_name)
        if family == ProviderFamily.UNKNOWN:
            logger.error(f"Unknown model: {model_name}")
            raise ConfigFailure(f"unknown model: {model_name}")
        adapter = self.adapters.get(family)
        if adapter is None:
            raise ConfigFailure(f"No adapter configured for provider {family.value} (model: {model_name})")
        return family, adapter

    def _budget(self, rendered: str, max_tokens_to_sample: int, context_size: Optional[int]) -> Tuple[int, int]:
        """Return (max_tokens, estimated prompt tokens) for the rendered prompt."""
        if max_tokens_to_sample != AUTO_MAX_TOKENS:
            return max_tokens_to_sample, 0

        estimated_tokens = self.token_estimator.count(rendered)
        window = context_size if context_size is not None else self.default_context_size
        max_tokens = window - estimated_tokens
        logger.info(f"Computed max tokens {max_tokens} ({window} context - {estimated_tokens} prompt)")
        if max_tokens <= 0:
            # Left to the provider to reject
            logger.warning(f"Prompt uses {estimated_tokens} tokens, leaving a budget of {max_tokens}")
        return max_tokens, estimated_tokens

    def prepare(
        self,
        model_name: str,
        system_prompt: str,
        user_prompt: str,
        model_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens_to_sample: int = AUTO_MAX_TOKENS,
        stop_sequences: Optional[List[str]] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        metadata: Optional[Dict[str, str]] = None,
        context_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> AdapterRequest:
        """
        Build the provider-ready request without calling the provider.

        The token budget is computed on the final framed prompt, so the
        estimate covers exactly what is transmitted.

        Raises:
            ConfigFailure: if the model identifier matches no provider family
        """
        family, adapter = self._adapter_for(model_name)
        messages, rendered = adapter.frame(system_prompt, user_prompt)
        target_model, api_base = adapter.target(model_name, model_url)

        max_tokens, estimated_tokens = self._budget(rendered, max_tokens_to_sample, context_size)

        return AdapterRequest(
            provider=family,
            model=target_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            stop_sequences=stop_sequences,
            top_p=top_p,
            top_k=top_k,
            metadata=metadata,
            api_base=api_base,
            timeout=timeout,
            rendered_prompt=rendered,
            estimated_tokens=estimated_tokens,
        )

    def prepare_chat(
        self,
        model_name: str,
        messages: List[Dict[str, str]],
        model_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens_to_sample: int = AUTO_MAX_TOKENS,
        stop_sequences: Optional[List[str]] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        metadata: Optional[Dict[str, str]] = None,
        context_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> AdapterRequest:
        """
        Build a provider-ready request for a caller-supplied chat message list.

        The messages are sent as given. The -1 budget is computed on their
        compact JSON serialization.

        Raises:
            ConfigFailure: unknown model identifier or an empty message list
        """
        family, adapter = self._adapter_for(model_name)
        if not messages:
            raise ConfigFailure("messages must not be empty")
        messages = [dict(message) for message in messages]
        rendered = json.dumps(messages, separators=(",", ":"), ensure_ascii=False)
        target_model, api_base = adapter.target(model_name, model_url)
        max_tokens, estimated_tokens = self._budget(rendered, max_tokens_to_sample, context_size)

        return AdapterRequest(
            provider=family,
            model=target_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            stop_sequences=stop_sequences,
            top_p=top_p,
            top_k=top_k,
            metadata=metadata,
            api_base=api_base,
            timeout=timeout,
            rendered_prompt=rendered,
            estimated_tokens=estimated_tokens,
        )

    def stream_chat(
        self,
        model_name: str,
        messages: List[Dict[str, str]],
        model_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens_to_sample: int = AUTO_MAX_TOKENS,
        stop_sequences: Optional[List[str]] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        metadata: Optional[Dict[str, str]] = None,
        context_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Iterator[str]:
        """
        Stream a chat completion as content deltas.

        Example:
            for delta in router.stream_chat("gpt-4", [{"role": "user", "content": "Hi"}]):
                print(delta, end="", flush=True)

        Raises:
            ConfigFailure: unknown model identifier or an empty message list
            ProviderFailure: the call failed, when starting or mid-stream
        """
        request = self.prepare_chat(
            model_name,
            messages,
            model_url=model_url,
            temperature=temperature,
            max_tokens_to_sample=max_tokens_to_sample,
            stop_sequences=stop_sequences,
            top_p=top_p,
            top_k=top_k,
            metadata=metadata,
            context_size=context_size,
            timeout=timeout,
        )
        logger.info(f"Streaming {model_name} from {request.provider.value} adapter")
        return self.adapters[request.provider].stream(request)

    def complete(
        self,
        model_name: str,
        system_prompt: str,
        user_prompt: str,
        model_url: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens_to_sample: int = AUTO_MAX_TOKENS,
        stop_sequences: Optional[List[str]] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        metadata: Optional[Dict[str, str]] = None,
        context_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Send a system and user prompt to the model and return its completion text.

        Raises:
            ConfigFailure: unknown model identifier
            ProviderFailure: the adapter or its transport failed
        """
        request = self.prepare(
            model_name,
            system_prompt,
            user_prompt,
            model_url=model_url,
            temperature=temperature,
            max_tokens_to_sample=max_tokens_to_sample,
            stop_sequences=stop_sequences,
            top_p=top_p,
            top_k=top_k,
            metadata=metadata,
            context_size=context_size,
            timeout=timeout,
        )
        logger.info(f"Routing {model_name} to {request.provider.value} adapter")
        return self.adapters[request.provider].complete(request)

    def call(self, model_config: ModelConfig, system_prompt: str, user_prompt: str) -> str:
        """Same as complete(), taking the generation parameters from a ModelConfig."""
        return self.complete(
            model_config.model_name,
            system_prompt,
            user_prompt,
            model_url=model_config.model_url,
            temperature=model_config.temperature,
            max_tokens_to_sample=model_config.max_tokens_to_sample,
            stop_sequences=model_config.stop_sequences,
            top_p=model_config.top_p,
            top_k=model_config.top_k,
            metadata=model_config.metadata,
            context_size=model_config.context_size,
            timeout=model_config.timeout,
        )
