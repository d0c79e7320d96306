#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
fncall - Function Registry

This module defines the registry interface the pipeline reads function
definitions from, and an in-memory implementation. The SQL-backed registry
lives in db.db_operations.
"""

import uuid
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from .function import FunctionDefinition

# Set up logging
logger = logging.getLogger(__name__)


class FunctionRegistry(ABC):
    """
    Stores function definitions scoped to an (assistant, user) pair.

    Both identifiers are opaque scope keys. Name uniqueness within a scope
    is not enforced.
    """

    @abstractmethod
    def register(self, assistant_id: str, user_id: str, function: FunctionDefinition) -> str:
        """
        Register a function for an assistant and user.

        Returns:
            The id of the registered function

        Raises:
            ConfigFailure: if the identifiers or the schema cannot be stored
        """

    @abstractmethod
    def list_functions(self, assistant_id: str, user_id: str) -> List[FunctionDefinition]:
        """Get every function registered for the assistant and user, in registration order."""


class InMemoryFunctionRegistry(FunctionRegistry):
    """Dictionary-backed registry, mainly for tests and embedding."""

    def __init__(self):
        self._functions: Dict[Tuple[str, str], List[Tuple[str, FunctionDefinition]]] = {}
        self._lock = threading.Lock()

    def register(self, assistant_id: str, user_id: str, function: FunctionDefinition) -> str:
        function_id = str(uuid.uuid4())
        with self._lock:
            scope = self._functions.setdefault((assistant_id, user_id), [])
            if any(existing.name == function.name for _, existing in scope):
                logger.warning(f"Function {function.name} already registered for this scope")
            scope.append((function_id, function))
        logger.info(f"Registered function: {function.name} ({function_id})")
        return function_id

    def list_functions(self, assistant_id: str, user_id: str) -> List[FunctionDefinition]:
        with self._lock:
            return [function for _, function in self._functions.get((assistant_id, user_id), [])]
