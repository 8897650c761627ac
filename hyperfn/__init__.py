"""Typed functions for OpenAI tool calling: define, export as tools, dispatch calls."""
from hyperfn.errors import BadArgumentsError, HyperFnError, UnknownFunctionError
from hyperfn.tools import (
    FunctionDefinition,
    HyperStore,
    hyper,
    hyper_function_to_tool,
    hyper_store,
    tool_parameters,
)

__all__ = [
    "BadArgumentsError",
    "FunctionDefinition",
    "HyperFnError",
    "HyperStore",
    "UnknownFunctionError",
    "hyper",
    "hyper_function_to_tool",
    "hyper_store",
    "tool_parameters",
]
