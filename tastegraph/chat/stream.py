"""
Encoders for the AI SDK data stream protocol.

Every part is one line: a type code, a colon, a JSON value and a newline.
The browser client reassembles text deltas and tool invocations from them.
"""
from __future__ import annotations

import json
from typing import Any

DATA_STREAM_HEADERS = {"x-vercel-ai-data-stream": "v1"}

_FINISH_REASONS = {
    "stop": "stop",
    "length": "length",
    "tool_calls": "tool-calls",
    "content_filter": "content-filter",
}


def _part(code: str, value: Any) -> str:
    return f"{code}:{json.dumps(value, default=str, separators=(',', ':'))}\n"


def map_finish_reason(reason: str | None) -> str:
    if not reason:
        return "unknown"
    return _FINISH_REASONS.get(reason, reason)


def text_part(text: str) -> str:
    return _part("0", text)


def error_part(message: str) -> str:
    return _part("3", message)


def tool_call_part(call_id: str, name: str, args: Any) -> str:
    return _part("9", {"toolCallId": call_id, "toolName": name, "args": args})


def tool_result_part(call_id: str, result: Any) -> str:
    return _part("a", {"toolCallId": call_id, "result": result})


def start_step_part(message_id: str) -> str:
    return _part("f", {"messageId": message_id})


def finish_step_part(reason: str, usage: dict[str, int], is_continued: bool = False) -> str:
    return _part("e", {"finishReason": reason, "usage": usage, "isContinued": is_continued})


def finish_message_part(reason: str, usage: dict[str, int]) -> str:
    return _part("d", {"finishReason": reason, "usage": usage})
