"""Exceptions raised while dispatching tool calls."""
from pydantic import ValidationError


class HyperFnError(Exception):
    """Base exception for all hyperfn errors."""


class UnknownFunctionError(HyperFnError, AssertionError):
    """A tool call named a function that is not in the store.

    The caller exported tools from one store and dispatched against another
    (or the model invented a name). This is a programming error, not input to
    feed back to the model.
    """

    def __init__(self, function_name: str) -> None:
        super().__init__(f"No function registered under the name {function_name!r}")
        self.function_name = function_name


class BadArgumentsError(HyperFnError):
    """Tool call arguments did not match the function's schema.

    The message is written for the model: send it back as the tool output so
    the call can be retried with corrected parameters.
    """

    def __init__(self, function_name: str, errors: ValidationError | None = None) -> None:
        super().__init__(
            "There was an issue with parsing the function arguments, "
            f"please rewrite it by calling the {function_name} function with the correct parameters."
        )
        self.function_name = function_name
        self.errors = errors
