# MIT License (see LICENSE)
"""
Experiment analysis through an external text generator.

The physics code never depends on a particular model or vendor. A service
is anything with an ``async analyze(...)`` that turns the experiment name,
its setup parameters and a short numeric summary into free text. The text
is shown as is; nothing is parsed out of it.

Service failures are caught here, at the call site, and replaced by a
fixed message. They never reach the animation loop or the lab state.

Example:
    class EchoService:
        async def analyze(self, experiment_name, parameters, summary, language):
            return build_analysis_prompt(experiment_name, parameters, summary, language)

    text = asyncio.run(analyze_experiment(EchoService(), PendulumLab()))
"""
from __future__ import annotations
import json
from typing import TYPE_CHECKING, Mapping, Protocol

from ..logging_utils import get_logger

if TYPE_CHECKING:
    from ..labs.base import Lab

logger = get_logger(__name__)

ANALYSIS_FALLBACK_MESSAGE = "I couldn't analyze the data at this moment. Please check your connection."
EMPTY_ANALYSIS_MESSAGE = "Analysis complete, but no text generated."


class AnalysisService(Protocol):
    async def analyze(
        self,
        experiment_name: str,
        parameters: Mapping[str, object],
        summary: str,
        language: str,
    ) -> str:
        ...


def build_analysis_prompt(
    experiment_name: str,
    parameters: Mapping[str, object],
    summary: str,
    language: str = "en",
) -> str:
    """
    Lab-assistant prompt for a text generator.

    ``parameters`` are embedded as JSON, so they must be JSON-serializable
    (numbers, strings and lists of them).
    """
    return (
        "You are an AI Physics Lab Assistant.\n"
        f"Experiment: {experiment_name}\n"
        f"Setup Parameters: {json.dumps(dict(parameters))}\n"
        f"Observed Data Summary: {summary}\n"
        "\n"
        "Please provide a concise analysis of the results.\n"
        "1. Check if the results match theoretical expectations.\n"
        "2. Explain any potential sources of error (friction, measurement error).\n"
        "3. Use a simple metaphor to explain the key concept observed.\n"
        "4. Keep the tone warm, encouraging, and scientific.\n"
        f"Answer in the language with code '{language}'.\n"
    )


async def analyze_experiment(service: AnalysisService, lab: Lab, language: str = "en") -> str:
    """
    Ask ``service`` about the current state of ``lab``.

    Returns:
        The service's text, EMPTY_ANALYSIS_MESSAGE for an empty reply, or
        ANALYSIS_FALLBACK_MESSAGE if the service raised.
    """
    try:
        text = await service.analyze(lab.name, lab.parameters(), lab.summary(), language)
    except Exception:
        logger.warning("Analysis of %s failed", lab.name, exc_info=True)
        return ANALYSIS_FALLBACK_MESSAGE
    return text or EMPTY_ANALYSIS_MESSAGE
