"""Chat message builders for command responses."""

from __future__ import annotations

from typing import Any, Final

SUCCESS_COLOR: Final = "#45B254"
WARNING_COLOR: Final = "#FFCC00"
ERROR_COLOR: Final = "#D94649"


def code_line(text: str) -> str:
    return f"`{text}`"


def _attachment_message(title: str, text: str, color: str) -> dict[str, Any]:
    return {
        "attachments": [
            {
                "author_name": title,
                "text": text,
                "fallback": text,
                "color": color,
                "mrkdwn_in": ["text"],
            }
        ]
    }


def success_message(title: str, text: str) -> dict[str, Any]:
    return _attachment_message(title, text, SUCCESS_COLOR)


def warning_message(title: str, text: str) -> dict[str, Any]:
    return _attachment_message(title, text, WARNING_COLOR)


def error_message(title: str, text: str) -> dict[str, Any]:
    return _attachment_message(title, text, ERROR_COLOR)


__all__ = [
    "ERROR_COLOR",
    "SUCCESS_COLOR",
    "WARNING_COLOR",
    "code_line",
    "error_message",
    "success_message",
    "warning_message",
]
