#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Token Estimator

Estimates how many tokens a rendered prompt will consume so the router can
size the response budget.
"""

import logging
from typing import Optional

from litellm.utils import token_counter

from .config import get_tokenizer_model

# Set up logging
logger = logging.getLogger(__name__)


class TokenEstimator:
    """Counts tokens with litellm, falling back to a character-based estimate."""

    # Rough token estimation used when the tokenizer is unavailable
    tokens_per_message = 4
    tokens_per_char = 0.25

    def __init__(self, tokenizer_model: Optional[str] = None):
        """
        Initialize the estimator.

        Args:
            tokenizer_model: Model whose tokenizer litellm should use. Defaults to TOKENIZER_MODEL.
        """
        self.tokenizer_model = tokenizer_model or get_tokenizer_model()

    def estimate(self, text: str) -> int:
        """Character-based approximation of the token count."""
        return int(len(text) * self.tokens_per_char) + self.tokens_per_message

    def count(self, text: str) -> int:
        """
        Count tokens in a text blob.

        Args:
            text: The fully rendered text that will be sent to the provider

        Returns:
            Token count
        """
        try:
            count = token_counter(model=self.tokenizer_model, text=text)
            logger.debug(f"Token count for {len(text)} characters: {count}")
            return count
        except Exception as e:
            logger.warning(f"Error counting tokens with litellm: {str(e)}. Falling back to estimation.")
            return self.estimate(text)
