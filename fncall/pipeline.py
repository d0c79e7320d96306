#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Function Call Pipeline

This module composes the prompt builder, the model router and the extraction
engine into one operation per function definition, and runs that operation
over every function registered for an assistant and user.

Two batch policies are offered:
1. create_function_calls - the first failure aborts the batch and is raised
2. create_function_call_outcomes - every definition yields a result or an error
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Union

from .config import ModelConfig, get_max_workers
from .errors import ConfigFailure, DispatchError
from .extraction import extract_function_call
from .function import FunctionCallRequest, FunctionCallResult
from .prompt_builder import build_function_call_prompt
from .registry import FunctionRegistry
from .retry import RetryingRouter
from .router import ModelRouter

# Set up logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


@dataclass
class FunctionCallOutcome:
    """Per-definition result of a batch: either a result or the error that prevented it."""
    function_name: str
    result: Optional[FunctionCallResult] = None
    error: Optional[DispatchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FunctionCallPipeline:
    """Generates one function call per registered function definition."""

    def __init__(
        self,
        registry: FunctionRegistry,
        router: Optional[Union[ModelRouter, RetryingRouter]] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            registry: Where function definitions are looked up
            router: Router used for the model calls. Pass a RetryingRouter to retry provider failures.
            max_workers: Upper bound on definitions processed concurrently. 1 means sequential.
                Defaults to FUNCTION_CALL_MAX_WORKERS from the environment, else 4.
        """
        self.registry = registry
        self.router = router or ModelRouter()
        self.max_workers = max_workers if max_workers is not None else get_max_workers()
        if self.max_workers < 1:
            raise ConfigFailure(f"max_workers must be at least 1, got {self.max_workers}")

        logger.info(f"FunctionCallPipeline initialized with max_workers={self.max_workers}")

    def generate_function_call(self, request: FunctionCallRequest) -> FunctionCallResult:
        """
        Ask the model to call one function for the user's context.

        Args:
            request: The function, the user context and the model config

        Returns:
            The extracted function call

        Raises:
            DispatchError: ParseFailure, ProviderFailure or ConfigFailure, tagged with the function name
        """
        function_name = request.function.name
        try:
            prompt = build_function_call_prompt(request.function, request.user_context)
            logger.info(f"Generating function call with prompt: {prompt.user}")

            # Budget inputs (max_tokens_to_sample, context_size, metadata) come from the
            # request config; with the default -1 the router computes the budget
            completion = self.router.call(request.model_config, prompt.system, prompt.user)
            logger.debug(f"Completion for {function_name}: {completion}")

            result = extract_function_call(completion)
        except DispatchError as e:
            if e.function_name is None:
                e.function_name = function_name
            logger.error(f"Failed to generate function call for {function_name}: {e.message}")
            raise

        logger.info(f"Function call generated: {result.name} with arguments: {result.arguments}")
        return result

    def _build_requests(
        self,
        assistant_id: str,
        user_id: str,
        model_config: ModelConfig,
    ) -> List[FunctionCallRequest]:
        functions = self.registry.list_functions(assistant_id, user_id)
        logger.info(f"Found {len(functions)} functions for assistant {assistant_id} and user {user_id}")
        return [
            FunctionCallRequest(
                function=function,
                user_context=model_config.user_prompt,
                model_config=model_config.clone(),
            )
            for function in functions
        ]

    def _workers_for(self, count: int) -> int:
        return max(1, min(self.max_workers, count))

    def create_function_calls(
        self,
        assistant_id: str,
        user_id: str,
        model_config: ModelConfig,
    ) -> List[FunctionCallResult]:
        """
        Generate a function call for every function registered for the assistant and user.

        Results are returned in registry order. The first failure, in registry
        order, aborts the batch: tasks that have not started are cancelled and
        the error is raised with the failing function's name attached.

        Args:
            assistant_id: Opaque assistant scope key
            user_id: Opaque user scope key
            model_config: Model and user prompt used for every function

        Returns:
            One FunctionCallResult per registered function
        """
        requests = self._build_requests(assistant_id, user_id, model_config)
        if not requests:
            return []

        workers = self._workers_for(len(requests))
        if workers == 1:
            return [self.generate_function_call(request) for request in requests]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.generate_function_call, request) for request in requests]
            results = []
            try:
                for future in futures:
                    results.append(future.result())
            except Exception:
                for future in futures:
                    future.cancel()
                raise
            return results

    def _outcome(self, request: FunctionCallRequest) -> FunctionCallOutcome:
        try:
            result = self.generate_function_call(request)
        except DispatchError as e:
            return FunctionCallOutcome(function_name=request.function.name, error=e)
        return FunctionCallOutcome(function_name=request.function.name, result=result)

    def create_function_call_outcomes(
        self,
        assistant_id: str,
        user_id: str,
        model_config: ModelConfig,
    ) -> List[FunctionCallOutcome]:
        """
        Like create_function_calls, but a failing function does not abort the batch.

        Returns:
            One outcome per registered function, in registry order
        """
        requests = self._build_requests(assistant_id, user_id, model_config)
        if not requests:
            return []

        with ThreadPoolExecutor(max_workers=self._workers_for(len(requests))) as executor:
            outcomes = list(executor.map(self._outcome, requests))

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        if failed:
            logger.warning(f"{failed} of {len(outcomes)} function calls failed")
        return outcomes
