"""Conversion configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from outbreak.core.models import ListNesting, TaskDateType


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "OUTBREAK_"

Priority = Literal["A", "B", "C"]

DEFAULT_PRIORITY_MAPPING: tuple[tuple[str, Priority], ...] = (
    ("🔺", "A"),
    ("⏫", "A"),
    ("🔼", "B"),
    ("🔽", "C"),
    ("⏬", "C"),
)

DEFAULT_DATE_PROPERTIES: dict[TaskDateType, Optional[str]] = {
    TaskDateType.start:     None,
    TaskDateType.created:   ".created",
    TaskDateType.done:      ".completed",
    TaskDateType.cancelled: ".cancelled",
}

# Rendered as DEADLINE:/SCHEDULED: lines, never as properties
FIXED_DATE_TYPES = frozenset({TaskDateType.deadline, TaskDateType.scheduled})

TASK_ENV_FIELDS = ("global_filter_tag", "convert_dates")


class TasksConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    global_filter_tag: Optional[str] = Field(default="#task", description="Tag removed from task text; empty or None disables")
    priority_mapping:  tuple[tuple[str, Priority], ...] = Field(default=DEFAULT_PRIORITY_MAPPING, description="Ordered (emoji, letter) pairs")
    convert_dates:     bool = Field(default=True, description="Extract dated emoji into DEADLINE/SCHEDULED/property lines")
    date_properties:   dict[TaskDateType, Optional[str]] = Field(
        default_factory=lambda: dict(DEFAULT_DATE_PROPERTIES),
        description="Property name per date type; None drops the date",
    )

    @field_validator("global_filter_tag")
    @classmethod
    def _empty_tag_disables(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("priority_mapping", mode="before")
    @classmethod
    def _pairs_from_mapping(cls, value: Any) -> Any:
        """Accept a YAML mapping {emoji: letter}; insertion order is kept."""
        if isinstance(value, dict):
            return tuple(value.items())
        return value

    @field_validator("date_properties")
    @classmethod
    def _merge_date_properties(cls, value: dict[TaskDateType, Optional[str]]) -> dict[TaskDateType, Optional[str]]:
        fixed = sorted(t.value for t in FIXED_DATE_TYPES & set(value))
        if fixed:
            raise ValueError(f"date_properties cannot remap {', '.join(fixed)}")
        return {**DEFAULT_DATE_PROPERTIES, **value}


class TranslationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    tasks:        TasksConfig = Field(default_factory=TasksConfig)
    list_nesting: ListNesting = Field(default=ListNesting.paragraph, description="Placement of a list after a paragraph")


def load_config(overrides: dict[str, Any] = None) -> TranslationConfig:
    """Load TranslationConfig from config.yaml, then OUTBREAK_* env vars, then non-None CLI overrides.

    Override keys are top-level field names or task field names
    (e.g. ``convert_dates``); task fields are routed into ``tasks``.
    """
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping at the top level")

    tasks: dict[str, Any] = dict(data.pop("tasks", None) or {})

    for name in TranslationConfig.model_fields:
        if name == "tasks":
            continue
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val
    for name in TASK_ENV_FIELDS:
        if val := os.getenv(f"{ENV_PREFIX}TASKS_{name.upper()}"):
            tasks[name] = val

    if overrides:
        for key, val in overrides.items():
            if val is None:
                continue
            if key in TasksConfig.model_fields:
                tasks[key] = val
            else:
                data[key] = val

    return TranslationConfig(**data, tasks=tasks)
