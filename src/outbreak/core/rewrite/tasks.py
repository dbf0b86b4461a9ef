"""Task rule: Obsidian Tasks checkboxes to Logseq task markers"""

import re
from datetime import date
from functools import partial
from typing import Optional

from outbreak.config import TasksConfig
from outbreak.core.errors import TaskDateError
from outbreak.core.models import Rule, Task, TaskDate, TaskDateType
from outbreak.core.utils.fences import fenced_lines


TASK_RE = re.compile(r'^(\s*)- \[(.)\](.*)$')

STATUS_MARKERS: tuple[tuple[str, str], ...] = (
    (" ", "TODO"),
    ("/", "DOING"),
    ("x", "DONE"),
    ("-", "CANCELLED"),
)
DATE_EMOJI: tuple[tuple[str, TaskDateType], ...] = (
    ("📅", TaskDateType.deadline),
    ("⏳", TaskDateType.scheduled),
    ("🛫", TaskDateType.start),
    ("➕", TaskDateType.created),
    ("✅", TaskDateType.done),
    ("❌", TaskDateType.cancelled),
)
DATE_RE = re.compile(
    "(" + "|".join(re.escape(e) for e, _ in DATE_EMOJI) + r")\s*(\d{4}-\d{2}-\d{2})"
)

_STATUSES = dict(STATUS_MARKERS)
_DATE_TYPES = dict(DATE_EMOJI)

META_INDENT = "  "


def format_task_date(iso_date: str) -> str:
    """'2024-01-01' -> '2024-01-01 Mon'"""
    try:
        day = date.fromisoformat(iso_date)
    except ValueError as e:
        raise TaskDateError(f"Invalid task date '{iso_date}': {e}") from e
    return f"{iso_date} {day.strftime('%a')}"


def parse_task(line: str, config: TasksConfig) -> Optional[Task]:
    """Parse a checkbox line into a Task; None for non-tasks and unknown markers."""
    m = TASK_RE.match(line)
    if not m:
        return None
    indent, marker, body = m.groups()
    status = _STATUSES.get(marker)
    if status is None:
        return None

    dates: list[TaskDate] = []
    if config.convert_dates:
        dates = [TaskDate(type=_DATE_TYPES[emoji], date=d) for emoji, d in DATE_RE.findall(body)]
        body = DATE_RE.sub("", body)

    priority = None
    for emoji, letter in config.priority_mapping:
        if emoji not in body:
            continue
        if priority is None:
            priority = letter
        body = re.sub(r'\s?' + re.escape(emoji), "", body, count=1)

    if config.global_filter_tag:
        body = re.sub(" " + re.escape(config.global_filter_tag) + r'\b', "", body, count=1)

    body = body.rstrip()
    if body and not body[0].isspace():
        body = " " + body
    return Task(indent=indent, status=status, body=body, dates=dates, priority=priority)


def render_task(task: Task, config: TasksConfig) -> list[str]:
    priority = f" [#{task.priority}]" if task.priority else ""
    lines = [f"{task.indent}- {task.status}{priority}{task.body}"]
    meta = task.indent + META_INDENT
    for d in task.dates:
        stamp = format_task_date(d.date)
        if d.type is TaskDateType.deadline:
            lines.append(f"{meta}DEADLINE: <{stamp}>")
        elif d.type is TaskDateType.scheduled:
            lines.append(f"{meta}SCHEDULED: <{stamp}>")
        elif name := config.date_properties.get(d.type):
            lines.append(f"{meta}{name}:: [[{d.date}]]")
    return lines


def convert_tasks(text: str, config: TasksConfig) -> str:
    """Rewrite task lines outside fenced code."""
    skip = fenced_lines(text)
    out: list[str] = []
    for i, line in enumerate(text.split("\n")):
        task = None if i in skip else parse_task(line, config)
        if task is None:
            out.append(line)
        else:
            out.extend(render_task(task, config))
    return "\n".join(out)


def tasks_rule(config: TasksConfig) -> Rule:
    return Rule(name="tasks", convert=partial(convert_tasks, config=config))
