# Rev 0.2.0
"""Schedule drafting and risk analysis through a generative provider.

One request per call: no retries, no caching. Whatever goes wrong (transport,
empty reply, JSON that doesn't fit the shape) surfaces as AIServiceError with
a fixed, user-facing message; the cause is logged and chained.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Union

from ..models.entities import Risk, Schedule
from .ai_provider import AIProvider

log = logging.getLogger(__name__)

SCHEDULE_ERROR = "Could not generate the schedule. Please try again."
RISK_ERROR = "Could not analyze the risks. Please try again."
RISK_COUNT = 5


class AIServiceError(Exception):
    """Failure of an AI tool call; str(err) is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


SCHEDULE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "phases": {
            "type": "ARRAY",
            "description": "List of project phases.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING", "description": "Phase name."},
                    "duration": {"type": "STRING", "description": "Estimated phase duration in days."},
                    "tasks": {
                        "type": "ARRAY",
                        "description": "Tasks within the phase.",
                        "items": {"type": "STRING"},
                    },
                },
            },
        },
    },
}

RISK_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "risk": {"type": "STRING", "description": "Risk description."},
            "probability": {"type": "STRING", "description": "Likelihood of occurrence (Low, Medium, High)."},
            "mitigation": {"type": "STRING", "description": "Suggested mitigation strategy."},
        },
    },
}


def schedule_prompt(description: str, duration_days: Union[int, str], start_date: str) -> str:
    return (
        "You are a construction project management assistant. "
        f'Create a detailed schedule for the following project: "{description}". '
        f"The project must last {duration_days} days, starting on {start_date}. "
        "The schedule must include the main phases (e.g. Planning, Foundation, Structure, "
        "Finishing, Delivery) and specific tasks for each phase, with duration estimates in days. "
        "Format the output as JSON."
    )


def risk_prompt(description: str) -> str:
    return (
        "You are a risk analysis expert for construction projects. "
        f'For the project described as "{description}", identify {RISK_COUNT} potential risks. '
        "For each risk, give a short description, the probability of occurrence (Low, Medium, High) "
        "and a mitigation strategy. Format the output as JSON."
    )


def _load_json(text: str) -> Any:
    text = (text or "").strip()
    if not text:
        raise ValueError("empty response")
    return json.loads(text)


class AIService:
    """Adapter between dashboard inputs and an AIProvider."""

    def __init__(self, provider: AIProvider):
        self._provider = provider

    def request_schedule(self, description: str, duration_days: Union[int, str], start_date: str) -> Schedule:
        prompt = schedule_prompt(description, duration_days, start_date)
        try:
            text = self._provider.generate_json(prompt, SCHEDULE_SCHEMA)
            schedule = Schedule.from_dict(_load_json(text))
        except Exception as exc:
            log.exception("Error generating schedule via %s", self._provider.name)
            raise AIServiceError(SCHEDULE_ERROR) from exc
        log.info("Generated schedule with %d phases", len(schedule.phases))
        return schedule

    def request_risk_analysis(self, description: str) -> List[Risk]:
        prompt = risk_prompt(description)
        try:
            text = self._provider.generate_json(prompt, RISK_SCHEMA)
            risks = Risk.list_from_json(_load_json(text))
        except Exception as exc:
            log.exception("Error analyzing risks via %s", self._provider.name)
            raise AIServiceError(RISK_ERROR) from exc
        if len(risks) != RISK_COUNT:
            log.warning("Risk analysis returned %d items, expected %d", len(risks), RISK_COUNT)
        return risks
