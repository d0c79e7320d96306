"""
fncall - LLM function-call dispatch.

Routes a model identifier to its provider, prompts the model to pick a
function and its arguments, and extracts the structured call from the reply.
"""

from fncall.config import ModelConfig
from fncall.errors import ConfigFailure, DispatchError, ParseFailure, ProviderFailure
from fncall.extraction import extract_function_call
from fncall.function import FunctionCallRequest, FunctionCallResult, FunctionDefinition
from fncall.pipeline import FunctionCallOutcome, FunctionCallPipeline
from fncall.prompt_builder import build_function_call_prompt, build_user_prompt
from fncall.providers import ProviderFamily, classify_model
from fncall.registry import FunctionRegistry, InMemoryFunctionRegistry
from fncall.retry import RetryingRouter, RetryPolicy
from fncall.router import ModelRouter
from fncall.tokens import TokenEstimator

__version__ = "0.1.0"

__all__ = [
    'ModelConfig',
    'DispatchError',
    'ParseFailure',
    'ProviderFailure',
    'ConfigFailure',
    'extract_function_call',
    'FunctionDefinition',
    'FunctionCallRequest',
    'FunctionCallResult',
    'FunctionCallOutcome',
    'FunctionCallPipeline',
    'build_function_call_prompt',
    'build_user_prompt',
    'ProviderFamily',
    'classify_model',
    'FunctionRegistry',
    'InMemoryFunctionRegistry',
    'RetryPolicy',
    'RetryingRouter',
    'ModelRouter',
    'TokenEstimator',
]
