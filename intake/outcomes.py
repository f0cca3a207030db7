"""Canned analysis outcomes returned by the stub provider."""

from intake.schemas import (
    DietFoods,
    DietPlan,
    PregnancyOutcome,
    SkinOutcome,
    VitalSigns,
    VitalsInput,
)

SKIN_OUTCOME = SkinOutcome(
    condition="Malignant Melanoma",
    type="Skin Cancer",
    severity="High",
    confidence=0.92,
    details=[
        "Irregular border pattern detected",
        "Asymmetrical shape identified",
        "Multiple color variations present",
    ],
    recommendations=[
        "Urgent consultation with a dermatologist required",
        "Schedule an appointment within 48 hours",
        "Avoid sun exposure to the affected area",
        "Document any changes in size or color",
        "Apply prescribed topical medication if available",
    ],
    preventive_measures=[
        "Use broad-spectrum sunscreen (SPF 50+)",
        "Wear protective clothing",
        "Perform monthly self-examinations",
        "Schedule regular skin screenings",
    ],
)

PREGNANCY_RISK_LEVEL = "Moderate"
PREGNANCY_CONFIDENCE = 0.85

PREGNANCY_IMMEDIATE_ACTIONS = [
    "Schedule appointment with OB/GYN within 1 week",
    "Monitor blood pressure twice daily",
    "Keep blood sugar levels in check",
]

PREGNANCY_DIET_PLAN = DietPlan(
    recommendations=[
        "Increase folic acid intake to 400mcg daily",
        "Consume 75-100g of protein daily",
        "Stay hydrated with 8-10 glasses of water",
        "Avoid processed foods and excess sugar",
    ],
    foods=DietFoods(
        recommended=[
            "Leafy greens",
            "Lean proteins",
            "Whole grains",
            "Low-fat dairy products",
        ],
        avoid=[
            "Raw fish",
            "Unpasteurized dairy",
            "Excess caffeine",
            "Processed meats",
        ],
    ),
)

PREGNANCY_LIFESTYLE = [
    "Gentle exercise for 30 minutes daily",
    "Get 8 hours of sleep",
    "Practice stress-reduction techniques",
    "Avoid smoking and alcohol",
]

PREGNANCY_NEXT_STEPS = [
    "Book prenatal checkup",
    "Start taking prenatal vitamins",
    "Join prenatal exercise class",
    "Consider genetic screening",
]


def vital_signs_from(vitals: VitalsInput) -> VitalSigns:
    # Raw strings are echoed back; blood pressure is a display string.
    return VitalSigns(
        blood_pressure=f"{vitals.systolic_bp}/{vitals.diastolic_bp}",
        blood_sugar=vitals.blood_sugar,
        temperature=vitals.body_temp,
        heart_rate=vitals.heart_rate,
    )


def pregnancy_outcome_for(vitals: VitalsInput) -> PregnancyOutcome:
    return PregnancyOutcome(
        risk_level=PREGNANCY_RISK_LEVEL,
        confidence=PREGNANCY_CONFIDENCE,
        vital_signs=vital_signs_from(vitals),
        immediate_actions=list(PREGNANCY_IMMEDIATE_ACTIONS),
        diet_plan=PREGNANCY_DIET_PLAN,
        lifestyle=list(PREGNANCY_LIFESTYLE),
        next_steps=list(PREGNANCY_NEXT_STEPS),
    )
