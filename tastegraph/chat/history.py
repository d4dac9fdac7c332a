from __future__ import annotations

from .models import ChatMessage

_LLM_ROLES = {"user", "assistant"}


def filter_completed_messages(messages: list[ChatMessage]) -> list[dict[str, str]]:
    """
    Turn UI chat messages into plain LLM history.

    Tool invocations and message parts from earlier turns are dropped (their
    outcome is already in the assistant text), and assistant messages that
    are left with no text are removed.
    """
    history: list[dict[str, str]] = []
    for message in messages:
        if message.role not in _LLM_ROLES:
            continue
        content = (message.content or "").strip()
        if message.role == "assistant" and not content:
            continue
        history.append({"role": message.role, "content": content})
    return history
