"""Request builders for the assistant's backend calls.

Structured requests describe the schema twice: as prose in the user prompt
and as the parameters of a forced function call. Either way the reply is
handed to ``extract()``, which tolerates the model ignoring both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from chatbind.core.schema import FieldKind, FieldSpec

from .models import ChatMessage, ChatRequest

if TYPE_CHECKING:
    from chatbind.config import Config
    from chatbind.core.schema import SchemaDescription

SYSTEM_PROMPT = "You are a helpful assistant."
SUMMARY_MAX_TOKENS = 300


def summary_request(title: str, config: Config) -> ChatRequest:
    """Ask for a short plain-text summary of a movie."""
    return ChatRequest(
        model=cast("str", config.model),
        messages=(
            ChatMessage("system", SYSTEM_PROMPT),
            ChatMessage(
                "user",
                f"Give me a summary of the movie {title}. Max under 250 tokens.",
            ),
        ),
        max_tokens=SUMMARY_MAX_TOKENS,
        temperature=config.temperature,
    )


def describe_field(spec: FieldSpec) -> str:
    """Return a one-line prompt description of a field."""
    match spec.kind:
        case FieldKind.TEXT:
            shape = "string"
            if spec.max_length is not None:
                shape += f", at most {spec.max_length} characters"
        case FieldKind.INTEGER:
            shape = "integer"
        case FieldKind.TEXT_LIST:
            shape = "array of strings"
            if spec.max_items is not None:
                shape += f", at most {spec.max_items} items"
            if spec.max_length is not None:
                shape += f", each at most {spec.max_length} characters"
    line = f'- "{spec.name}" ({shape})'
    return f"{line}: {spec.description}" if spec.description else line


def schema_instructions(schema: SchemaDescription) -> str:
    """Tell the model to emit exactly the schema's JSON shape."""
    lines = [
        "Respond with a single JSON object and nothing else.",
        "Use exactly these keys:",
        *(describe_field(spec) for spec in schema),
    ]
    return "\n".join(lines)


def structured_request(
    schema: SchemaDescription, prompt: str, config: Config
) -> ChatRequest:
    """Ask for ``prompt`` answered as a record of ``schema``."""
    return ChatRequest(
        model=cast("str", config.model),
        messages=(
            ChatMessage("system", SYSTEM_PROMPT),
            ChatMessage("user", f"{prompt}\n\n{schema_instructions(schema)}"),
        ),
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        functions=(schema.function_definition(),),
        function_call=schema.name,
    )
