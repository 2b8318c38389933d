"""JSON envelope printed by every ``--json`` command."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from fitplan.errors import ValidationError

SCHEMA_VERSION = "1.0"


@dataclass
class AgentResponse:
    """One command's machine-readable result.

    ``warnings`` carries non-fatal notes such as skipped log rows or a target
    raised to the calorie floor. ``errors`` holds one record per failure: a
    message, plus ``field`` and ``constraint`` when an input failed
    validation.
    """

    command: str
    success: bool = True
    data: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: list[dict[str, str]] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "command": self.command,
            "success": self.success,
            "summary": self.summary,
            "data": self.data,
            "warnings": self.warnings,
            "errors": self.errors,
            "generated_at": datetime.now().isoformat(timespec="seconds"),
        }

    def to_json(self, indent: int = 2) -> str:
        # Dates and enums in data fall back to str()
        return json.dumps(self.to_dict(), indent=indent, default=str)


def respond(
    command: str,
    data: dict[str, Any],
    warnings: list[str] | None = None,
    summary: str = "",
) -> AgentResponse:
    """Successful result for a command."""
    return AgentResponse(
        command=command,
        data=data,
        warnings=list(warnings or []),
        summary=summary,
    )


def failure(command: str, error: Exception | str) -> AgentResponse:
    """Failed result for a command.

    Args:
        command: The command that failed
        error: The exception (or message) that stopped it

    Returns:
        AgentResponse with success=False and a single error record
    """
    record = {"message": str(error)}
    if isinstance(error, ValidationError):
        record.update(error.to_dict())
    return AgentResponse(
        command=command,
        success=False,
        errors=[record],
        summary=f"Error: {error}",
    )
