#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for function definitions and the in-memory registry.
"""

import os
import sys
import json
import unittest
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

# Add the parent directory to the path so we can import the fncall package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fncall.function import FunctionCallResult, FunctionDefinition
from fncall.registry import InMemoryFunctionRegistry


class WeatherInput(BaseModel):
    """Input model for the weather function."""
    city: str = Field(..., description="City to get the weather for")
    units: Optional[str] = Field("metric", description="metric or imperial")


class TestFunctionDefinition(unittest.TestCase):
    """Test cases for FunctionDefinition."""

    def test_from_model(self):
        function = FunctionDefinition.from_model("weather", "Get the weather", WeatherInput)

        self.assertEqual(function.name, "weather")
        self.assertEqual(function.parameters["type"], "object")
        self.assertIn("city", function.parameters["properties"])
        self.assertEqual(function.parameters["required"], ["city"])
        self.assertNotIn("title", function.parameters)

    def test_empty_name_rejected(self):
        with self.assertRaises(ValidationError):
            FunctionDefinition(name="")

    def test_frozen(self):
        function = FunctionDefinition(name="weather")
        with self.assertRaises(ValidationError):
            function.name = "other"

    def test_prompt_dict_keeps_null_description(self):
        function = FunctionDefinition(name="ping")
        self.assertEqual(function.to_prompt_dict(), {"name": "ping", "description": None, "parameters": {}})


class TestFunctionCallResult(unittest.TestCase):
    """Test cases for FunctionCallResult."""

    def test_default_arguments(self):
        result = FunctionCallResult(name="ping")
        self.assertEqual(result.arguments, "{}")
        self.assertEqual(result.parsed_arguments(), {})

    def test_to_dict_is_json_serializable(self):
        result = FunctionCallResult(name="weather", arguments='{"city":"Toronto"}')
        self.assertEqual(json.loads(json.dumps(result.to_dict()))["arguments"], '{"city":"Toronto"}')


class TestInMemoryFunctionRegistry(unittest.TestCase):
    """Test cases for InMemoryFunctionRegistry."""

    def setUp(self):
        self.registry = InMemoryFunctionRegistry()

    def test_registration_order(self):
        for name in ("c", "a", "b"):
            self.registry.register("assistant", "user", FunctionDefinition(name=name))
        names = [f.name for f in self.registry.list_functions("assistant", "user")]
        self.assertEqual(names, ["c", "a", "b"])

    def test_unknown_scope_is_empty(self):
        self.assertEqual(self.registry.list_functions("nobody", "nobody"), [])

    def test_ids_are_unique(self):
        first = self.registry.register("assistant", "user", FunctionDefinition(name="a"))
        second = self.registry.register("assistant", "user", FunctionDefinition(name="a"))
        self.assertNotEqual(first, second)
        self.assertEqual(len(self.registry.list_functions("assistant", "user")), 2)

    def test_listing_returns_a_copy(self):
        self.registry.register("assistant", "user", FunctionDefinition(name="a"))
        listed = self.registry.list_functions("assistant", "user")
        listed.clear()
        self.assertEqual(len(self.registry.list_functions("assistant", "user")), 1)


if __name__ == "__main__":
    unittest.main()
