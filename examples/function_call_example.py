#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Example script demonstrating the FunctionCallPipeline.

Registers two functions for an assistant and user, then asks the model to
call each of them for a prompt typed at the console.

Usage:
    python examples/function_call_example.py [model_name]
"""

import os
import sys
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Add the parent directory to the path so we can import the fncall module
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fncall import (
    DispatchError,
    FunctionCallPipeline,
    FunctionDefinition,
    InMemoryFunctionRegistry,
    ModelConfig,
    RetryingRouter,
    ModelRouter,
)

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

ASSISTANT_ID = "3f1c2a9e-6d4b-4f0e-9a51-0c7d8e2b1a44"
USER_ID = "00000000-0000-0000-0000-000000000000"


class WeatherInput(BaseModel):
    """Input model for the weather function."""
    city: str = Field(..., description="Name of the city")
    units: Optional[str] = Field("metric", description="metric or imperial")


class SearchDocsInput(BaseModel):
    """Input model for the documentation search function."""
    query: str = Field(..., description="The search query")


def main():
    """Run the example."""
    model_name = sys.argv[1] if len(sys.argv) > 1 else "gpt-4o-mini"

    registry = InMemoryFunctionRegistry()
    registry.register(
        ASSISTANT_ID, USER_ID,
        FunctionDefinition.from_model("weather", "Get the current weather for a city", WeatherInput),
    )
    registry.register(
        ASSISTANT_ID, USER_ID,
        FunctionDefinition.from_model("search_python_docs", "Search the Python documentation", SearchDocsInput),
    )

    pipeline = FunctionCallPipeline(registry, router=RetryingRouter(ModelRouter()))

    print("\n=== Function Call Example ===")
    print(f"Model: {model_name}. Type 'exit' to quit.\n")

    while True:
        user_input = input("\nYou: ")
        if user_input.lower() == 'exit':
            print("Exiting...")
            break

        config = ModelConfig(model_name=model_name, user_prompt=user_input, temperature=0.0)
        try:
            outcomes = pipeline.create_function_call_outcomes(ASSISTANT_ID, USER_ID, config)
        except DispatchError as e:
            logger.error(f"Error: {str(e)}")
            print(f"An error occurred: {str(e)}")
            continue

        for outcome in outcomes:
            if outcome.ok:
                print(f"  {outcome.result.name}({outcome.result.arguments})")
            else:
                print(f"  {outcome.function_name} failed: {outcome.error.to_dict()}")


if __name__ == "__main__":
    main()
