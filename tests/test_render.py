from intake.outcomes import SKIN_OUTCOME, pregnancy_outcome_for
from intake.render import format_confidence, render_outcome, render_vital_signs, result_title
from intake.schemas import VitalsInput


def _fields(section):
    return {f.label: f.value for f in section.fields}


def _pregnancy(vitals):
    return pregnancy_outcome_for(VitalsInput.model_validate(vitals))


def test_vital_signs_block_shows_blood_pressure(vitals):
    block = render_vital_signs(_pregnancy(vitals))
    assert block.title == "Vital Signs Analysis"
    assert _fields(block) == {
        "Blood Pressure": "120/80",
        "Blood Sugar": "95",
        "Temperature": "36.8°C",
        "Heart Rate": "72 bpm",
    }


def test_skin_sections():
    sections = render_outcome(SKIN_OUTCOME)
    assert [s.title for s in sections] == [
        "Diagnosis",
        "Clinical Details",
        "Recommendations",
        "Preventive Measures",
    ]
    assert _fields(sections[0])["Confidence"] == "92.0%"
    assert sections[1].items[0] == "Irregular border pattern detected"
    assert result_title(SKIN_OUTCOME) == "Analysis Results"


def test_pregnancy_sections(vitals):
    outcome = _pregnancy(vitals)
    sections = render_outcome(outcome)
    assert sections[0].title == "Risk Overview"
    assert _fields(sections[0]) == {"Risk Level": "Moderate", "Confidence": "85.0%"}
    diet = next(s for s in sections if s.title == "Diet Plan")
    assert [s.title for s in diet.subsections] == ["General Recommendations", "Recommended Foods", "Foods to Avoid"]
    assert "Raw fish" in diet.subsections[2].items
    assert sections[-1].items == [
        "Book prenatal checkup",
        "Start taking prenatal vitamins",
        "Join prenatal exercise class",
        "Consider genetic screening",
    ]
    assert result_title(outcome) == "Risk Assessment Results"


def test_no_outcome_renders_nothing():
    assert render_outcome(None) == []


def test_format_confidence():
    assert format_confidence(0.9) == "90.0%"
    assert format_confidence(0.125) == "12.5%"
