"""Builders for chat-completion bodies used across the suite."""

from __future__ import annotations

import json
from typing import Any

MOVIE = {
    "title": "The Third Man",
    "year": 1949,
    "director": "Carol Reed",
    "genres": ["Film noir", "Thriller"],
    "actors": ["Joseph Cotten", "Alida Valli", "Orson Welles", "Trevor Howard"],
}

RECIPE = {
    "title": "Shakshuka",
    "totalTime": "35 minutes",
    "countryOfOrigin": "Tunisia",
    "ingredients": ["4 eggs", "1 can crushed tomatoes", "1 onion", "2 tsp cumin"],
    "steps": [
        "Soften the onion in olive oil.",
        "Add tomatoes and cumin; simmer 10 minutes.",
        "Crack in the eggs, cover and cook until set.",
    ],
}


def envelope(message: dict[str, Any], *extra_choices: dict[str, Any]) -> str:
    """Return a chat-completion body whose first choice carries ``message``."""
    choices = [{"index": 0, "message": message, "finish_reason": "stop"}]
    choices.extend(
        {"index": i, "message": m, "finish_reason": "stop"}
        for i, m in enumerate(extra_choices, start=1)
    )
    return json.dumps({"id": "chatcmpl-test", "object": "chat.completion", "choices": choices})


def content_envelope(content: str | None) -> str:
    return envelope({"role": "assistant", "content": content})


def function_call_envelope(arguments: Any, *, name: str = "movie_details") -> str:
    args = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return envelope(
        {
            "role": "assistant",
            "content": None,
            "function_call": {"name": name, "arguments": args},
        }
    )


def tool_call_envelope(arguments: Any, *, name: str = "movie_details") -> str:
    args = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return envelope(
        {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": name, "arguments": args},
                }
            ],
        }
    )
