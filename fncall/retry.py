#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Retry Policy

Retry with exponential backoff around a ModelRouter. Kept outside the router
so routing and retrying can be tested separately.
"""

import time
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import ModelConfig
from .errors import ProviderFailure
from .router import ModelRouter

# Set up logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry a provider call and how long to wait in between."""
    max_attempts: int = 3
    initial_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 30.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number `attempt` (1-based)."""
        return min(self.initial_delay * (self.backoff_factor ** (attempt - 1)), self.max_delay)

    def should_retry(self, error: Exception) -> bool:
        return isinstance(error, ProviderFailure) and error.recoverable


class RetryingRouter:
    """Wraps a ModelRouter and retries recoverable ProviderFailures."""

    def __init__(
        self,
        router: ModelRouter,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.router = router
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def complete(self, model_name: str, system_prompt: str, user_prompt: str, **kwargs) -> str:
        attempt = 1
        while True:
            try:
                return self.router.complete(model_name, system_prompt, user_prompt, **kwargs)
            except ProviderFailure as e:
                if attempt >= self.policy.max_attempts or not self.policy.should_retry(e):
                    raise
                delay = self.policy.delay_for(attempt)
                logger.warning(
                    f"Provider call to {model_name} failed (attempt {attempt}/{self.policy.max_attempts}): "
                    f"{e}. Retrying in {delay:.1f}s"
                )
                self._sleep(delay)
                attempt += 1

    def call(self, model_config: ModelConfig, system_prompt: str, user_prompt: str) -> str:
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
