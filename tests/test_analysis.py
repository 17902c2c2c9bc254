import asyncio
import json

from physics_lab.analysis import (
    ANALYSIS_FALLBACK_MESSAGE,
    EMPTY_ANALYSIS_MESSAGE,
    analyze_experiment,
    build_analysis_prompt,
)
from physics_lab.labs import ChainFountainLab, ChainParams, PendulumLab


class RecordingService:
    def __init__(self, reply=""):
        self.reply = reply
        self.calls = []

    async def analyze(self, experiment_name, parameters, summary, language):
        self.calls.append((experiment_name, parameters, summary, language))
        return self.reply


class FailingService:
    async def analyze(self, experiment_name, parameters, summary, language):
        raise ConnectionError("offline")


def test_service_receives_lab_description():
    lab = PendulumLab()
    lab.advance(1 / 60)
    service = RecordingService("Period matches T = 2π√(L/g).")

    text = asyncio.run(analyze_experiment(service, lab, "de"))
    assert text == "Period matches T = 2π√(L/g)."

    name, params, summary, language = service.calls[0]
    assert name == "Simple Pendulum"
    assert params["length"] == 1.5
    assert summary == lab.summary()
    assert language == "de"


def test_service_failure_gives_fallback_message():
    lab = PendulumLab()
    assert asyncio.run(analyze_experiment(FailingService(), lab)) == ANALYSIS_FALLBACK_MESSAGE
    # Lab state untouched.
    assert lab.time == 0.0


def test_empty_reply():
    assert asyncio.run(analyze_experiment(RecordingService(""), PendulumLab())) == EMPTY_ANALYSIS_MESSAGE


def test_prompt_contains_setup_and_summary():
    lab = ChainFountainLab(ChainParams(chain_length=20, seed=0))
    prompt = build_analysis_prompt(lab.name, lab.parameters(), lab.summary(), "fr")
    print(prompt)

    assert prompt.startswith("You are an AI Physics Lab Assistant.")
    assert "Experiment: Chain Fountain" in prompt
    assert f"Setup Parameters: {json.dumps(lab.parameters())}" in prompt
    assert "Mould Effect" in prompt
    assert "'fr'" in prompt
