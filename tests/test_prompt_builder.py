#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the prompt builder.
"""

import os
import sys
import json
import unittest

# Add the parent directory to the path so we can import the fncall package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fncall.errors import ConfigFailure
from fncall.function import FunctionDefinition
from fncall.prompt_builder import build_function_call_prompt, build_user_prompt
from fncall.prompts import FUNCTION_CALL_SYSTEM_PROMPT


class TestBuildUserPrompt(unittest.TestCase):
    """Test cases for build_user_prompt."""

    def setUp(self):
        self.function = FunctionDefinition(
            name="weather",
            description="Get the weather for a city",
            parameters={"type": "object", "properties": {"city": {"type": "string"}}},
        )

    def test_payload_shape(self):
        prompt = build_user_prompt(self.function, "Give me a weather report for Toronto")
        payload = json.loads(prompt)
        self.assertEqual(set(payload), {"function", "user_context"})
        self.assertEqual(payload["function"], self.function.to_prompt_dict())
        self.assertEqual(payload["user_context"], "Give me a weather report for Toronto")

    def test_pretty_printed(self):
        prompt = build_user_prompt(self.function, "hi")
        self.assertIn('\n  "function": {', prompt)

    def test_non_ascii_kept_verbatim(self):
        prompt = build_user_prompt(self.function, "Météo à Montréal")
        self.assertIn("Météo à Montréal", prompt)

    def test_empty_context(self):
        self.assertEqual(json.loads(build_user_prompt(self.function, ""))["user_context"], "")

    def test_unencodable_context(self):
        with self.assertRaises(ConfigFailure) as ctx:
            build_user_prompt(self.function, "broken \ud800 surrogate")
        self.assertEqual(ctx.exception.function_name, "weather")

    def test_non_serializable_parameters(self):
        function = FunctionDefinition(name="odd", parameters={"default": object()})
        with self.assertRaises(ConfigFailure):
            build_user_prompt(function, "hi")


class TestBuildFunctionCallPrompt(unittest.TestCase):
    """Test cases for build_function_call_prompt."""

    def test_system_is_fixed_instruction(self):
        function = FunctionDefinition(name="ping")
        prompt = build_function_call_prompt(function, "are you there?")
        self.assertEqual(prompt.system, FUNCTION_CALL_SYSTEM_PROMPT)
        self.assertEqual(json.loads(prompt.user)["function"]["name"], "ping")

    def test_instruction_asks_for_json_call(self):
        self.assertIn('"name"', FUNCTION_CALL_SYSTEM_PROMPT)
        self.assertIn('"arguments"', FUNCTION_CALL_SYSTEM_PROMPT)


if __name__ == "__main__":
    unittest.main()
