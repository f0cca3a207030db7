import os
from dataclasses import dataclass


def _flag(name: str, default: str = "0") -> bool:
	return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
	api_host: str = os.getenv("API_HOST", "0.0.0.0")
	api_port: int = int(os.getenv("API_PORT", "8000"))
	log_level: str = os.getenv("LOG_LEVEL", "INFO")

	# "stub" returns the canned outcomes, "http" forwards to a real inference service
	analysis_provider: str = os.getenv("ANALYSIS_PROVIDER", "stub")

	# Simulated latency of the stub provider
	analysis_delay_seconds: float = float(os.getenv("ANALYSIS_DELAY_SECONDS", "2.0"))
	stub_failure: bool = _flag("STUB_FAILURE")

	# Remote inference service settings
	analysis_base_url: str = os.getenv("ANALYSIS_BASE_URL", "http://localhost:8001")
	analysis_timeout_seconds: float = float(os.getenv("ANALYSIS_TIMEOUT_SECONDS", "30.0"))

	max_image_bytes: int = int(os.getenv("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))


settings = Settings()
