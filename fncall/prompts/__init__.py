"""
Prompt assets for fncall.
"""

from .function_call import FUNCTION_CALL_PROMPT_VERSION, FUNCTION_CALL_SYSTEM_PROMPT

__all__ = [
    'FUNCTION_CALL_PROMPT_VERSION',
    'FUNCTION_CALL_SYSTEM_PROMPT',
]
