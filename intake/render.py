"""
Turns an analysis outcome into the display blocks shown on the result card.

The sections mirror what the result view prints: a heading per block,
labelled values, and bullet lists. Values are never recomputed; vital signs
are shown exactly as submitted.
"""
from __future__ import annotations
from typing import List, Optional

from intake.schemas import (
    AnalysisOutcome,
    PregnancyOutcome,
    RenderedField,
    RenderedSection,
    SkinOutcome,
)


def format_confidence(confidence: float) -> str:
    return f"{confidence * 100:.1f}%"


def _section(title: str, items: List[str]) -> RenderedSection:
    return RenderedSection(title=title, items=list(items))


def render_skin(outcome: SkinOutcome) -> List[RenderedSection]:
    diagnosis = RenderedSection(
        title="Diagnosis",
        fields=[
            RenderedField(label="Condition", value=outcome.condition),
            RenderedField(label="Type", value=outcome.type),
            RenderedField(label="Severity", value=outcome.severity),
            RenderedField(label="Confidence", value=format_confidence(outcome.confidence)),
        ],
    )
    return [
        diagnosis,
        _section("Clinical Details", outcome.details),
        _section("Recommendations", outcome.recommendations),
        _section("Preventive Measures", outcome.preventive_measures),
    ]


def render_vital_signs(outcome: PregnancyOutcome) -> RenderedSection:
    vitals = outcome.vital_signs
    return RenderedSection(
        title="Vital Signs Analysis",
        fields=[
            RenderedField(label="Blood Pressure", value=vitals.blood_pressure),
            RenderedField(label="Blood Sugar", value=vitals.blood_sugar),
            RenderedField(label="Temperature", value=f"{vitals.temperature}°C"),
            RenderedField(label="Heart Rate", value=f"{vitals.heart_rate} bpm"),
        ],
    )


def render_pregnancy(outcome: PregnancyOutcome) -> List[RenderedSection]:
    overview = RenderedSection(
        title="Risk Overview",
        fields=[
            RenderedField(label="Risk Level", value=outcome.risk_level),
            RenderedField(label="Confidence", value=format_confidence(outcome.confidence)),
        ],
    )
    diet = RenderedSection(
        title="Diet Plan",
        subsections=[
            _section("General Recommendations", outcome.diet_plan.recommendations),
            _section("Recommended Foods", outcome.diet_plan.foods.recommended),
            _section("Foods to Avoid", outcome.diet_plan.foods.avoid),
        ],
    )
    return [
        overview,
        render_vital_signs(outcome),
        _section("Immediate Actions Required", outcome.immediate_actions),
        diet,
        _section("Lifestyle Recommendations", outcome.lifestyle),
        _section("Next Steps", outcome.next_steps),
    ]


def result_title(outcome: AnalysisOutcome) -> str:
    if isinstance(outcome, PregnancyOutcome):
        return "Risk Assessment Results"
    return "Analysis Results"


def render_outcome(outcome: Optional[AnalysisOutcome]) -> List[RenderedSection]:
    if outcome is None:
        return []
    if isinstance(outcome, SkinOutcome):
        return render_skin(outcome)
    return render_pregnancy(outcome)
