from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Selection(str, Enum):
	none = "none"
	skin = "skin"
	pregnancy = "pregnancy"


class AnalysisPhase(str, Enum):
	idle = "idle"
	analyzing = "analyzing"
	succeeded = "succeeded"
	failed = "failed"


class ImageSource(str, Enum):
	browse = "browse"
	drop = "drop"


class CamelModel(BaseModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True)


# Vitals form. Values stay raw strings; only emptiness is checked.
VITALS_REQUIRED_MESSAGES: Dict[str, str] = {
	"age": "Age is required",
	"systolicBP": "Systolic BP is required",
	"diastolicBP": "Diastolic BP is required",
	"bloodSugar": "Blood sugar level is required",
	"bodyTemp": "Body temperature is required",
	"heartRate": "Heart rate is required",
}


class VitalsInput(CamelModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True, coerce_numbers_to_str=True)

	age: str = Field(alias="age", min_length=1)
	systolic_bp: str = Field(alias="systolicBP", min_length=1)
	diastolic_bp: str = Field(alias="diastolicBP", min_length=1)
	blood_sugar: str = Field(alias="bloodSugar", min_length=1)
	body_temp: str = Field(alias="bodyTemp", min_length=1)
	heart_rate: str = Field(alias="heartRate", min_length=1)


# Outcomes
class SkinOutcome(CamelModel):
	condition: str
	type: str
	severity: str
	confidence: float
	details: List[str] = []
	recommendations: List[str] = []
	preventive_measures: List[str] = Field(default_factory=list, alias="preventiveMeasures")


class VitalSigns(CamelModel):
	blood_pressure: str = Field(alias="bloodPressure")
	blood_sugar: str = Field(alias="bloodSugar")
	temperature: str
	heart_rate: str = Field(alias="heartRate")


class DietFoods(CamelModel):
	recommended: List[str] = []
	avoid: List[str] = []


class DietPlan(CamelModel):
	recommendations: List[str] = []
	foods: DietFoods = DietFoods()


class PregnancyOutcome(CamelModel):
	risk_level: str = Field(alias="riskLevel")
	confidence: float
	vital_signs: VitalSigns = Field(alias="vitalSigns")
	immediate_actions: List[str] = Field(default_factory=list, alias="immediateActions")
	diet_plan: DietPlan = Field(default_factory=DietPlan, alias="dietPlan")
	lifestyle: List[str] = []
	next_steps: List[str] = Field(default_factory=list, alias="nextSteps")


AnalysisOutcome = Union[SkinOutcome, PregnancyOutcome]


class Notification(BaseModel):
	title: str
	description: str
	variant: Literal["default", "destructive"] = "default"


# Rendered result blocks
class RenderedField(BaseModel):
	label: str
	value: str


class RenderedSection(BaseModel):
	title: str
	fields: List[RenderedField] = []
	items: List[str] = []
	subsections: List["RenderedSection"] = []


# HTTP payloads
class ServiceCard(BaseModel):
	service: Literal["skin", "pregnancy"]
	title: str
	description: str


class ServiceCatalogResponse(BaseModel):
	title: str
	description: str
	services: List[ServiceCard]


class SelectionRequest(BaseModel):
	service: Literal["skin", "pregnancy"]


class ImageSummary(BaseModel):
	filename: Optional[str] = None
	content_type: str
	size_bytes: int
	width: Optional[int] = None
	height: Optional[int] = None
	preview: str


class SessionView(BaseModel):
	session_id: str
	selection: Selection
	phase: AnalysisPhase
	heading: Optional[str] = None
	can_go_back: bool = False
	can_submit: bool = False
	pending_image: Optional[ImageSummary] = None
	field_errors: Dict[str, str] = {}
	error: Optional[str] = None
	outcome: Optional[Dict] = None
	sections: List[RenderedSection] = []
	notifications: List[Notification] = []


class ImagePickResponse(SessionView):
	accepted: bool


class ResultResponse(BaseModel):
	session_id: str
	title: str
	selection: Selection
	phase: AnalysisPhase
	outcome: Dict
	sections: List[RenderedSection]
	timings: Dict[str, float] = {}
