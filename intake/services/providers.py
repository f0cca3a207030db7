from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import asyncio

import httpx
from pydantic import ValidationError

from intake.config import Settings, settings
from intake.errors import AnalysisError
from intake.outcomes import SKIN_OUTCOME, pregnancy_outcome_for
from intake.schemas import PregnancyOutcome, SkinOutcome, VitalsInput
from intake.state import PendingImage
from intake.utils.logging import get_logger

logger = get_logger("providers")


class AnalysisProvider(ABC):
    """Anything that can turn an intake submission into an outcome."""

    name: str = "provider"

    @abstractmethod
    async def analyze_skin(self, image: PendingImage) -> SkinOutcome:
        ...

    @abstractmethod
    async def assess_pregnancy(self, vitals: VitalsInput) -> PregnancyOutcome:
        ...

    async def aclose(self) -> None:
        return None


class StubAnalysisProvider(AnalysisProvider):
    """Sleeps for a fixed delay, then returns the canned outcomes."""

    name = "stub"

    def __init__(self, delay_seconds: float = 2.0, fail: bool = False) -> None:
        self.delay_seconds = delay_seconds
        self.fail = fail
        self.calls = 0

    async def _simulate(self, kind: str) -> None:
        self.calls += 1
        logger.info(f"[Stub] {kind} call #{self.calls}, sleeping {self.delay_seconds}s")
        await asyncio.sleep(self.delay_seconds)
        if self.fail:
            raise AnalysisError(f"stub provider configured to fail ({kind})")

    async def analyze_skin(self, image: PendingImage) -> SkinOutcome:
        await self._simulate("skin")
        return SKIN_OUTCOME

    async def assess_pregnancy(self, vitals: VitalsInput) -> PregnancyOutcome:
        await self._simulate("pregnancy")
        return pregnancy_outcome_for(vitals)


class HttpAnalysisProvider(AnalysisProvider):
    """Forwards submissions to a remote inference service."""

    name = "http"

    def __init__(self, base_url: str | None = None, timeout: float | None = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.base_url = (base_url or settings.analysis_base_url).rstrip("/")
        self.timeout = httpx.Timeout(timeout if timeout is not None else settings.analysis_timeout_seconds)
        self._transport = transport
        logger.info(f"Initialized HTTP provider with base_url: {self.base_url}")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _post(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.info(f"POST {url}")
        try:
            async with self._client() as client:
                response = await client.post(url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling analysis service: {url}, error: {e}")
            raise AnalysisError("analysis service timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error calling analysis service: {e}, response: {e.response.text}")
            raise AnalysisError(f"analysis service returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Error calling analysis service: {e}, type: {type(e)}")
            raise AnalysisError(f"analysis service unreachable: {e}") from e
        except ValueError as e:
            raise AnalysisError("analysis service returned invalid JSON") from e

    async def analyze_skin(self, image: PendingImage) -> SkinOutcome:
        files = {"file": (image.filename or "image", image.data, image.content_type)}
        data = await self._post("/v1/skin-analysis", files=files)
        try:
            return SkinOutcome.model_validate(data)
        except ValidationError as ve:
            logger.error(f"Skin outcome schema error: {ve}")
            raise AnalysisError("analysis service returned an unexpected skin outcome") from ve

    async def assess_pregnancy(self, vitals: VitalsInput) -> PregnancyOutcome:
        data = await self._post("/v1/pregnancy-assessment", json=vitals.model_dump(by_alias=True))
        try:
            return PregnancyOutcome.model_validate(data)
        except ValidationError as ve:
            logger.error(f"Pregnancy outcome schema error: {ve}")
            raise AnalysisError("analysis service returned an unexpected pregnancy outcome") from ve


def build_provider(config: Settings | None = None) -> AnalysisProvider:
    config = config or settings
    kind = (config.analysis_provider or "stub").strip().lower()
    if kind == "http":
        return HttpAnalysisProvider(config.analysis_base_url, config.analysis_timeout_seconds)
    if kind != "stub":
        logger.warning(f"Unknown ANALYSIS_PROVIDER={kind!r}, falling back to stub")
    return StubAnalysisProvider(config.analysis_delay_seconds, fail=config.stub_failure)
