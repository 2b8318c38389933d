"""Machine-readable output for scripts and agents."""

from __future__ import annotations

from fitplan.agent.response import AgentResponse, failure, respond

__all__ = ["AgentResponse", "failure", "respond"]
