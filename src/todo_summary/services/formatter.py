"""Notification formatting - pure functions from tasks to message content.

Two shapes are produced:
- Slack payloads (`{"text": ..., "blocks": [...]}`) for the webhook sender
- Plain-text reports for terminal output and the local client summary

Both share the same statistics and insight helpers.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from todo_summary.models import Task, TaskStats

RULE = "═" * 39

# (threshold, message) pairs, checked top to bottom
INSIGHT_TIERS: list[tuple[int, str]] = [
    (80, "🌟 Excellent progress! You're crushing your goals!"),
    (60, "👍 Good work! Keep the momentum going!"),
    (40, "💪 You're making progress! Stay focused!"),
]
FALLBACK_INSIGHT = "🚀 Time to power through those remaining tasks!"

ACTION_TEMPLATES: dict[str, tuple[str, str]] = {
    "added": ("➕", "*Todo Added:* {text}"),
    "completed": ("✅", "*Todo Completed:* {text}"),
    "uncompleted": ("⏳", "*Todo Marked as Pending:* {text}"),
    "deleted": ("🗑️", "*Todo Deleted:* {text}"),
    "updated": ("✏️", "*Todo Updated:* {text}"),
    "cleared_all": ("🧹", "*All Todos Cleared*"),
    "exported": ("📥", "*Todos Exported Successfully*"),
}

EMPTY_REPORT = "No todos to summarize."


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty list."""
    if total <= 0:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    """Count total, completed and pending tasks."""
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=completion_rate(completed, total),
    )


def productivity_insight(rate: int) -> str:
    """Pick the insight line for a completion rate."""
    for threshold, message in INSIGHT_TIERS:
        if rate >= threshold:
            return message
    return FALLBACK_INSIGHT


def format_date(now: datetime) -> str:
    """e.g. 'Monday, October 19, 2026'."""
    return f"{now:%A}, {now:%B} {now.day}, {now.year}"


def format_time(now: datetime) -> str:
    """e.g. '02:30 PM'."""
    return now.strftime("%I:%M %p")


def format_timestamp(now: datetime) -> str:
    """e.g. '10/19/2026, 2:30:00 PM'."""
    clock = now.strftime("%I:%M:%S %p").lstrip("0")
    return f"{now.month}/{now.day}/{now.year}, {clock}"


def numbered(tasks: Sequence[Task]) -> str:
    return "\n".join(f"{i}. {task.text}" for i, task in enumerate(tasks, start=1))


def format_checklist(tasks: Sequence[Task]) -> str:
    """Plain checklist form: one bullet per task with its completion mark."""
    lines = [f"• {'✓' if task.completed else '⃝'} {task.text}" for task in tasks]
    return "Todo Summary:\n" + "\n".join(lines)


def _mrkdwn(text: str) -> dict[str, str]:
    return {"type": "mrkdwn", "text": text}


def _context_block(text: str) -> dict[str, Any]:
    return {"type": "context", "elements": [_mrkdwn(text)]}


def build_text_message(message: str) -> dict[str, Any]:
    """Plain `text` payload used for free-form (e.g. LLM generated) summaries."""
    return {"text": f"📋 *Todo Summary*\n{message}"}


def build_summary_message(tasks: Sequence[Task], now: datetime) -> dict[str, Any]:
    """Structured summary: header, totals grid, task sections, insight, footer."""
    stats = compute_stats(tasks)

    blocks: list[dict[str, Any]] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"📋 Todo Summary Report - {format_date(now)}",
            },
        },
        {
            "type": "section",
            "fields": [
                _mrkdwn(f"*Total Tasks:* {stats.total}"),
                _mrkdwn(f"*Completed:* {stats.completed} ✅"),
                _mrkdwn(f"*Pending:* {stats.pending} ⏳"),
                _mrkdwn(f"*Progress:* {stats.completion_rate}% 📈"),
            ],
        },
    ]

    completed = [task for task in tasks if task.completed]
    pending = [task for task in tasks if not task.completed]

    if completed:
        blocks.append(
            {
                "type": "section",
                "text": _mrkdwn(f"*✅ Completed Tasks:*\n{numbered(completed)}"),
            }
        )
    if pending:
        blocks.append(
            {
                "type": "section",
                "text": _mrkdwn(f"*⏳ Pending Tasks:*\n{numbered(pending)}"),
            }
        )

    blocks.append(
        {
            "type": "section",
            "text": _mrkdwn(
                f"*🎯 Productivity Insights:*\n{productivity_insight(stats.completion_rate)}"
            ),
        }
    )
    blocks.append(
        _context_block(
            f"📤 Summary generated at {format_time(now)} | "
            "💡 Regular reviews help stay productive!"
        )
    )

    return {
        "blocks": blocks,
        "text": (
            f"Todo Summary - {stats.completed}/{stats.total} tasks completed "
            f"({stats.completion_rate}%)"
        ),
    }


def build_action_message(
    action: str,
    now: datetime,
    todo_text: str | None = None,
    additional_info: str | None = None,
) -> dict[str, Any]:
    """One-line notification for a single task action."""
    if action in ACTION_TEMPLATES:
        emoji, template = ACTION_TEMPLATES[action]
        message = template.format(text=todo_text or "")
    else:
        emoji, message = "📋", f"*Todo Action:* {action}"

    if additional_info:
        message += f"\n_{additional_info}_"

    return {
        "blocks": [
            {"type": "section", "text": _mrkdwn(f"{emoji} {message}")},
            _context_block(f"📅 {format_timestamp(now)}"),
        ],
        "text": f"{emoji} {message.replace('*', '')}",
    }


def build_simple_message(
    title: str, message: str, now: datetime, emoji: str = "📋"
) -> dict[str, Any]:
    """Titled notification with a timestamp footer."""
    return {
        "blocks": [
            {"type": "section", "text": _mrkdwn(f"{emoji} *{title}*\n{message}")},
            _context_block(f"📅 {format_timestamp(now)}"),
        ],
        "text": f"{emoji} {title}: {message}",
    }


def format_text_report(tasks: Sequence[Task], now: datetime) -> str:
    """Plain-text report shown by the local client."""
    if not tasks:
        return EMPTY_REPORT

    stats = compute_stats(tasks)
    completed = [task for task in tasks if task.completed]
    pending = [task for task in tasks if not task.completed]

    sections = [
        f"📋 Todo Summary Report - {format_date(now)} at {format_time(now)}",
        "\n".join(
            [
                "📊 OVERVIEW:",
                RULE,
                f"Total Tasks: {stats.total}",
                f"✅ Completed: {stats.completed}",
                f"⏳ Pending: {stats.pending}",
                f"📈 Progress: {stats.completion_rate}%",
            ]
        ),
    ]
    if completed:
        sections.append(f"✅ COMPLETED TASKS:\n{RULE}\n{numbered(completed)}")
    if pending:
        sections.append(f"⏳ PENDING TASKS:\n{RULE}\n{numbered(pending)}")
    sections.append(
        f"🎯 PRODUCTIVITY INSIGHTS:\n{RULE}\n{productivity_insight(stats.completion_rate)}"
    )
    sections.append(
        "📤 Status: Summary Generated Successfully!\n"
        "💡 Tip: Regular Task Reviews Help Maintain Productivity!"
    )
    return "\n\n".join(sections)
