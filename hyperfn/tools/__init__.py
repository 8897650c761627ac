"""Function definitions and the store that exposes them to the model as tools."""
from hyperfn.tools.base import (
    FunctionDefinition,
    hyper,
    hyper_function_to_tool,
    tool_parameters,
)
from hyperfn.tools.registry import HyperStore, hyper_store

__all__ = [
    "FunctionDefinition",
    "HyperStore",
    "hyper",
    "hyper_function_to_tool",
    "hyper_store",
    "tool_parameters",
]
