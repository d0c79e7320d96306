#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Live tests against real providers.

Skipped unless the matching API key is set in the environment or .env.
"""

import os
import sys
import unittest

from dotenv import load_dotenv

# Add the parent directory to the path so we can import the fncall package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fncall.config import ModelConfig
from fncall.function import FunctionDefinition
from fncall.pipeline import FunctionCallPipeline
from fncall.registry import InMemoryFunctionRegistry

# Load environment variables
load_dotenv()

ASSISTANT_ID = "3f1c2a9e-6d4b-4f0e-9a51-0c7d8e2b1a44"
USER_ID = "00000000-0000-0000-0000-000000000000"

WEATHER = FunctionDefinition(
    name="weather",
    description="Get the weather for a city",
    parameters={
        "type": "object",
        "required": ["city"],
        "properties": {"city": {"type": "string", "description": "Name of the city"}},
    },
)


class LiveWeatherCall:
    model_name = None

    def run_weather(self):
        registry = InMemoryFunctionRegistry()
        registry.register(ASSISTANT_ID, USER_ID, WEATHER)
        pipeline = FunctionCallPipeline(registry, max_workers=1)
        config = ModelConfig(
            model_name=self.model_name,
            user_prompt="Give me a weather report for Toronto",
            temperature=0.0,
            max_tokens_to_sample=200,
        )
        return pipeline.create_function_calls(ASSISTANT_ID, USER_ID, config)


@unittest.skipUnless(os.getenv("OPENAI_API_KEY"), "OPENAI_API_KEY not set")
class TestOpenAILive(LiveWeatherCall, unittest.TestCase):
    """Weather call through the OpenAI adapter."""

    model_name = os.getenv("OPENAI_TEST_MODEL", "gpt-4o-mini")

    def test_weather(self):
        results = self.run_weather()
        self.assertEqual(results[0].name, "weather")
        self.assertIn("toronto", results[0].parsed_arguments().get("city", "").lower())


@unittest.skipUnless(os.getenv("ANTHROPIC_API_KEY"), "ANTHROPIC_API_KEY not set")
class TestAnthropicLive(LiveWeatherCall, unittest.TestCase):
    """Weather call through the Anthropic adapter."""

    model_name = os.getenv("ANTHROPIC_TEST_MODEL", "claude-3-5-haiku-latest")

    def test_weather(self):
        results = self.run_weather()
        self.assertEqual(results[0].name, "weather")
        self.assertIn("toronto", results[0].parsed_arguments().get("city", "").lower())


if __name__ == "__main__":
    unittest.main()
