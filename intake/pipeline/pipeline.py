from __future__ import annotations
from typing import Dict, Tuple, Union
import json
import time

from intake.schemas import AnalysisOutcome, Selection, VitalsInput
from intake.services.providers import AnalysisProvider
from intake.state import PendingImage
from intake.utils.logging import get_logger

logger = get_logger("pipeline")

Submission = Union[PendingImage, VitalsInput]


async def run_analysis(provider: AnalysisProvider, selection: Selection,
                       submission: Submission) -> Tuple[AnalysisOutcome, Dict[str, float]]:
    timings: Dict[str, float] = {}

    start_time = time.perf_counter()
    if selection == Selection.skin:
        if not isinstance(submission, PendingImage):
            raise TypeError("skin analysis needs a PendingImage")
        logger.info(f"[STEP 1] Skin analysis via {provider.name}: {submission.content_type}, {submission.size_bytes} bytes")
        outcome: AnalysisOutcome = await provider.analyze_skin(submission)
    elif selection == Selection.pregnancy:
        if not isinstance(submission, VitalsInput):
            raise TypeError("pregnancy assessment needs a VitalsInput")
        logger.info(f"[STEP 1] Pregnancy assessment via {provider.name}")
        outcome = await provider.assess_pregnancy(submission)
    else:
        raise ValueError(f"no workflow for selection {selection.value!r}")
    timings["provider_seconds"] = round(time.perf_counter() - start_time, 2)

    logger.info(f"[STEP 2] Outcome: {json.dumps(outcome.model_dump(by_alias=True), ensure_ascii=False)}")
    logger.info(f"[TIMING] {provider.name} took {timings['provider_seconds']} seconds")
    return outcome, timings
