#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the TokenEstimator.
"""

import os
import sys
import unittest
from unittest.mock import patch

# Add the parent directory to the path so we can import the fncall package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fncall.tokens import TokenEstimator


class TestTokenEstimator(unittest.TestCase):
    """Test cases for TokenEstimator."""

    def test_estimate(self):
        estimator = TokenEstimator(tokenizer_model="gpt-3.5-turbo")
        self.assertEqual(estimator.estimate(""), 4)
        self.assertEqual(estimator.estimate("x" * 100), 29)

    @patch('fncall.tokens.token_counter')
    def test_count_uses_litellm(self, mock_counter):
        mock_counter.return_value = 42
        estimator = TokenEstimator(tokenizer_model="gpt-4")

        self.assertEqual(estimator.count("Hello, world!"), 42)
        mock_counter.assert_called_once_with(model="gpt-4", text="Hello, world!")

    @patch('fncall.tokens.token_counter')
    def test_count_falls_back_on_error(self, mock_counter):
        mock_counter.side_effect = RuntimeError("tokenizer unavailable")
        estimator = TokenEstimator(tokenizer_model="gpt-4")

        text = "y" * 40
        self.assertEqual(estimator.count(text), estimator.estimate(text))

    @patch.dict(os.environ, {"TOKENIZER_MODEL": "gpt-4o"})
    def test_tokenizer_model_from_env(self):
        self.assertEqual(TokenEstimator().tokenizer_model, "gpt-4o")

    @patch('fncall.tokens.token_counter')
    def test_longer_text_counts_more(self, mock_counter):
        mock_counter.side_effect = lambda model, text: len(text.split())
        estimator = TokenEstimator(tokenizer_model="gpt-4")
        self.assertGreater(estimator.count("one two three four"), estimator.count("one two"))


if __name__ == "__main__":
    unittest.main()
