"""Function store: export OpenAI tools, validate and dispatch tool calls by name."""
import inspect
import json
from typing import Any, Generic, Mapping

from openai.types.chat import ChatCompletionToolParam
from pydantic import ValidationError

from hyperfn import config
from hyperfn.errors import BadArgumentsError, UnknownFunctionError
from hyperfn.logging_utils import (
    get_logger,
    log_tool_call_end,
    log_tool_call_rejected,
    log_tool_call_start,
)
from hyperfn.tools.base import ContextT, FunctionDefinition, hyper_function_to_tool

logger = get_logger(__name__)


def _function_of(tool_call: Any) -> tuple[str, str]:
    """Return (name, raw arguments) from an openai tool call object or an equivalent dict."""
    if isinstance(tool_call, Mapping):
        fn = tool_call["function"]
        return fn["name"], fn["arguments"]
    return tool_call.function.name, tool_call.function.arguments


class HyperStore(Generic[ContextT]):
    """Name-keyed collection of function definitions.

    Registering under an existing name replaces the previous definition.
    Mutate with set() during setup; call_tool() only reads, so concurrent
    dispatch is safe once registration is done.
    """

    def __init__(self, functions: Mapping[str, FunctionDefinition[ContextT]] | None = None) -> None:
        self.functions: dict[str, FunctionDefinition[ContextT]] = dict(functions or {})

    def __contains__(self, name: object) -> bool:
        return name in self.functions

    def __len__(self) -> int:
        return len(self.functions)

    def set(self, name: str, definition: FunctionDefinition[ContextT]) -> None:
        self.functions[name] = definition

    def as_tools(self, *, sort: bool | None = None) -> list[ChatCompletionToolParam]:
        """Return one OpenAI tool descriptor per function, in registration order.
        sort=True orders them by name; None defers to the HYPERFN_SORT_TOOLS setting.
        """
        if sort is None:
            sort = config.HYPERFN_SORT_TOOLS
        items = sorted(self.functions.items()) if sort else self.functions.items()
        return [hyper_function_to_tool(name, definition) for name, definition in items]

    async def call_tool(self, tool_call: Any, context: ContextT) -> Any:
        """Validate a tool call's arguments and run the matching handler.

        tool_call is the model's tool call (openai SDK object or
        {"function": {"name", "arguments"}} dict). Raises UnknownFunctionError
        for an unregistered name and BadArgumentsError when the arguments do not
        match the schema; JSON decoding and handler errors propagate unchanged.
        Awaitable handler results are awaited.
        """
        name, raw_arguments = _function_of(tool_call)
        definition = self.functions.get(name)
        if definition is None:
            raise UnknownFunctionError(name)

        arguments = json.loads(raw_arguments)
        log_tool_call_start(logger, tool_name=name, arguments=arguments)
        try:
            # strict: no coercion beyond what the exported JSON Schema allows ("2" is not a number)
            validated = definition.schema.model_validate_json(raw_arguments, strict=True)
        except ValidationError as e:
            log_tool_call_rejected(logger, tool_name=name, error_count=e.error_count())
            raise BadArgumentsError(name, e) from e

        try:
            response = definition.handler(validated, context)
            if inspect.isawaitable(response):
                response = await response
        except Exception as e:
            log_tool_call_end(logger, tool_name=name, success=False, error=e)
            raise
        log_tool_call_end(logger, tool_name=name, success=True, result=response)
        return response


def hyper_store(
    functions: Mapping[str, FunctionDefinition[ContextT]] | None = None,
) -> HyperStore[ContextT]:
    """Create a store holding the given name -> definition mapping."""
    return HyperStore(functions)
