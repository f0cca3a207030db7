from typing import Optional

from intake.schemas import Selection, ServiceCard, ServiceCatalogResponse

PAGE_TITLE = "AI Health Diagnostic Platform"
PAGE_DESCRIPTION = (
    "Advanced AI-powered diagnostics for skin conditions and pregnancy risk assessment. "
    "Get instant, accurate insights to help guide your healthcare decisions."
)

SERVICES = [
    ServiceCard(
        service="skin",
        title="Skin Disease Screening",
        description="Upload an image for AI-powered analysis of skin conditions",
    ),
    ServiceCard(
        service="pregnancy",
        title="Pregnancy Risk Assessment",
        description="Get personalized risk assessment and recommendations",
    ),
]


def catalog() -> ServiceCatalogResponse:
    return ServiceCatalogResponse(title=PAGE_TITLE, description=PAGE_DESCRIPTION, services=SERVICES)


def heading_for(selection: Selection) -> Optional[str]:
    for card in SERVICES:
        if card.service == selection.value:
            return card.title
    return None
