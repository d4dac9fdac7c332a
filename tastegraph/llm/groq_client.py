from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Generator, Iterator

from groq import Groq

from ..chat.stream import (
    error_part,
    finish_message_part,
    finish_step_part,
    map_finish_reason,
    start_step_part,
    text_part,
    tool_call_part,
    tool_result_part,
)
from ..chat.tools import ToolContext, execute_tool, tool_definitions
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

StepResult = tuple[str, list[dict[str, str]], str, dict[str, int]]


def _empty_usage() -> dict[str, int]:
    return {"promptTokens": 0, "completionTokens": 0}


def _chunk_usage(chunk: Any) -> dict[str, int] | None:
    # Groq reports usage on the last chunk under ``x_groq``; OpenAI-style
    # servers put it on the chunk itself.
    x_groq = getattr(chunk, "x_groq", None)
    usage = getattr(x_groq, "usage", None) if x_groq is not None else None
    usage = usage or getattr(chunk, "usage", None)
    if not usage:
        return None
    return {
        "promptTokens": int(getattr(usage, "prompt_tokens", 0) or 0),
        "completionTokens": int(getattr(usage, "completion_tokens", 0) or 0),
    }


def _parse_arguments(raw: str) -> Any:
    try:
        return json.loads(raw or "{}")
    except json.JSONDecodeError:
        return raw


def _stream_step(
    client: Groq,
    history: list[dict[str, Any]],
    tools: list[dict[str, Any]],
    config: LLMConfig,
) -> Generator[str, None, StepResult]:
    """
    Stream one completion round, yielding text parts as they arrive.

    Returns the full text, the assembled tool calls, the raw finish reason
    and the token usage for the round.
    """
    stream = client.chat.completions.create(
        model=config.model,
        messages=history,
        tools=tools,
        tool_choice="auto",
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        stream=True,
    )

    text: list[str] = []
    calls: dict[int, dict[str, str]] = {}
    finish_reason = "stop"
    usage = _empty_usage()

    for chunk in stream:
        chunk_usage = _chunk_usage(chunk)
        if chunk_usage:
            usage = chunk_usage
        if not chunk.choices:
            continue

        choice = chunk.choices[0]
        delta = choice.delta
        if delta.content:
            text.append(delta.content)
            yield text_part(delta.content)

        # Tool calls arrive in fragments keyed by index.
        for fragment in delta.tool_calls or []:
            call = calls.setdefault(fragment.index, {"id": "", "name": "", "arguments": ""})
            if fragment.id:
                call["id"] = fragment.id
            if fragment.function is not None:
                if fragment.function.name:
                    call["name"] = fragment.function.name
                if fragment.function.arguments:
                    call["arguments"] += fragment.function.arguments

        if choice.finish_reason:
            finish_reason = choice.finish_reason

    tool_calls = []
    for index in sorted(calls):
        call = calls[index]
        if not call["id"]:
            call["id"] = f"call_{uuid.uuid4().hex[:24]}"
        tool_calls.append(call)

    return "".join(text), tool_calls, finish_reason, usage


def stream_chat(
    messages: list[dict[str, str]],
    system_prompt: str,
    tool_names: tuple[str, ...],
    context: ToolContext,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> Iterator[str]:
    """
    Run the multi-step tool loop and yield data stream parts.

    Each step streams a completion. If the model asked for tools they are
    executed, their results appended to the history and another step
    starts, up to ``config.max_steps``. No new step starts once
    ``config.max_duration`` seconds have passed. LLM errors are reported as
    an error part; the stream always ends with a finish part.
    """
    total_usage = _empty_usage()

    if not config.enabled or not config.api_key:
        yield error_part("The language model is not configured (missing GROQ_API_KEY).")
        yield finish_message_part("error", total_usage)
        return

    client = Groq(api_key=config.api_key, timeout=config.timeout)
    history: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}, *messages]
    tools = tool_definitions(tool_names)
    started = time.monotonic()
    finish_reason = "stop"

    for step in range(config.max_steps):
        if time.monotonic() - started > config.max_duration:
            logger.warning("Chat stopped after %d steps: %.0fs limit reached", step, config.max_duration)
            finish_reason = "length"
            break

        yield start_step_part(f"msg-{uuid.uuid4().hex[:24]}")
        try:
            text, tool_calls, raw_reason, usage = yield from _stream_step(
                client, history, tools, config,
            )
        except Exception as exc:
            logger.warning("Groq streaming call failed", exc_info=True)
            yield error_part(f"The language model request failed: {exc}")
            finish_reason = "error"
            break

        total_usage["promptTokens"] += usage["promptTokens"]
        total_usage["completionTokens"] += usage["completionTokens"]
        finish_reason = map_finish_reason(raw_reason)

        if not tool_calls:
            yield finish_step_part(finish_reason, usage)
            break

        history.append({
            "role": "assistant",
            "content": text or None,
            "tool_calls": [
                {
                    "id": call["id"],
                    "type": "function",
                    "function": {"name": call["name"], "arguments": call["arguments"] or "{}"},
                }
                for call in tool_calls
            ],
        })

        for call in tool_calls:
            yield tool_call_part(call["id"], call["name"], _parse_arguments(call["arguments"]))
            result = execute_tool(call["name"], call["arguments"], context)
            yield tool_result_part(call["id"], result)
            history.append({
                "role": "tool",
                "tool_call_id": call["id"],
                "content": json.dumps(result, default=str),
            })

        finish_reason = "tool-calls"
        yield finish_step_part(finish_reason, usage, is_continued=False)

    yield finish_message_part(finish_reason, total_usage)
