"""Function definitions: build them from pydantic fields and project them into OpenAI tool descriptors."""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, TypeVar

from openai.types.chat import ChatCompletionToolParam
from pydantic import BaseModel, ConfigDict, create_model
from pydantic.errors import PydanticInvalidForJsonSchema

from hyperfn.logging_utils import get_logger

logger = get_logger(__name__)

ContextT = TypeVar("ContextT")

# Handler as stored: arguments are erased to Any, validation re-establishes the types at dispatch time.
Handler = Callable[[Any, ContextT], Any]

_DEFS_PREFIX = "#/$defs/"


@dataclass(frozen=True)
class FunctionDefinition(Generic[ContextT]):
    """A callable exposed to the model: description, argument schema and handler."""

    description: str
    schema: type[BaseModel]
    handler: Handler[ContextT]


def _as_field(node: Any) -> tuple[Any, Any]:
    """Normalize a schema node to the (annotation, default) pair create_model expects.
    A bare annotation becomes a required field; (annotation, default_or_Field) passes through.
    """
    if isinstance(node, tuple) and len(node) == 2:
        return node
    return (node, ...)


def hyper(
    *,
    description: str,
    args: Mapping[str, Any],
    handler: Callable[[Any, ContextT], Any],
) -> FunctionDefinition[ContextT]:
    """Define a function the model can call.

    args maps argument name to a type annotation (required argument) or an
    (annotation, default) tuple, where default may be a pydantic Field carrying
    the argument's description, e.g. ``{"a": (float, Field(description="First addend"))}``.
    handler(validated_args, context) receives the validated, frozen pydantic
    model and the caller's context; it may return a value or an awaitable.
    """
    schema = create_model(
        "Arguments",
        __config__=ConfigDict(frozen=True),
        **{name: _as_field(node) for name, node in args.items()},
    )
    return FunctionDefinition(description=description, schema=schema, handler=handler)


def _inline_refs(node: Any, defs: Mapping[str, Any], seen: frozenset[str] = frozenset()) -> Any:
    """Replace local $defs references with the definitions they point to.
    Self-referencing models keep their $ref at the point of recursion.
    """
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith(_DEFS_PREFIX):
            name = ref[len(_DEFS_PREFIX):]
            if name in defs and name not in seen:
                target = _inline_refs(defs[name], defs, seen | {name})
                siblings = {k: _inline_refs(v, defs, seen) for k, v in node.items() if k != "$ref"}
                return {**target, **siblings}
        return {k: _inline_refs(v, defs, seen) for k, v in node.items()}
    if isinstance(node, list):
        return [_inline_refs(item, defs, seen) for item in node]
    return node


def _has_ref(node: Any) -> bool:
    if isinstance(node, dict):
        return "$ref" in node or any(_has_ref(v) for v in node.values())
    if isinstance(node, list):
        return any(_has_ref(item) for item in node)
    return False


def tool_parameters(schema: type[BaseModel]) -> dict[str, Any]:
    """Return the {type, properties, required} parameter schema for an argument model.
    Falls back to {} when the JSON Schema lacks any of the three keys (e.g. no required arguments).
    Recursive models still hold a $ref after inlining; their $defs are carried along.
    """
    try:
        json_schema = schema.model_json_schema()
    except PydanticInvalidForJsonSchema as e:
        logger.warning("tool_parameters_unavailable", schema=schema.__name__, error=str(e))
        return {}
    defs = json_schema.get("$defs", {})
    if defs:
        json_schema = _inline_refs(json_schema, defs)
    if "type" in json_schema and "properties" in json_schema and "required" in json_schema:
        parameters = {
            "type": json_schema["type"],
            "properties": json_schema["properties"],
            "required": json_schema["required"],
        }
        if defs and _has_ref(parameters):
            parameters["$defs"] = defs
        return parameters
    return {}


def hyper_function_to_tool(name: str, definition: FunctionDefinition[Any]) -> ChatCompletionToolParam:
    """Build the OpenAI tool descriptor for a function definition."""
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": definition.description,
            "parameters": tool_parameters(definition.schema),
        },
    }
