import asyncio
import json

import httpx
import pytest

from intake.config import Settings
from intake.errors import AnalysisError
from intake.forms import decode_image
from intake.outcomes import SKIN_OUTCOME, pregnancy_outcome_for
from intake.schemas import VitalsInput
from intake.services.providers import HttpAnalysisProvider, StubAnalysisProvider, build_provider


def _provider(handler):
    return HttpAnalysisProvider("http://inference.test/", timeout=5, transport=httpx.MockTransport(handler))


def test_http_skin_analysis_posts_image(png_bytes):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json=SKIN_OUTCOME.model_dump(by_alias=True))

    image = decode_image(png_bytes, "image/png", "mole.png")
    outcome = asyncio.run(_provider(handler).analyze_skin(image))
    assert outcome == SKIN_OUTCOME
    assert seen["url"] == "http://inference.test/v1/skin-analysis"
    assert png_bytes in seen["body"]
    assert b'filename="mole.png"' in seen["body"]


def test_http_pregnancy_sends_raw_strings(vitals):
    seen = {}
    parsed = VitalsInput.model_validate(vitals)

    def handler(request: httpx.Request) -> httpx.Response:
        seen["json"] = json.loads(request.read())
        return httpx.Response(200, json=pregnancy_outcome_for(parsed).model_dump(by_alias=True))

    outcome = asyncio.run(_provider(handler).assess_pregnancy(parsed))
    assert seen["json"] == vitals
    assert outcome.vital_signs.blood_pressure == "120/80"


def test_http_error_status_raises(vitals):
    provider = _provider(lambda request: httpx.Response(503, text="busy"))
    with pytest.raises(AnalysisError, match="503"):
        asyncio.run(provider.assess_pregnancy(VitalsInput.model_validate(vitals)))


def test_http_unexpected_payload_raises(png_bytes):
    provider = _provider(lambda request: httpx.Response(200, json={"diagnosis": "eczema"}))
    with pytest.raises(AnalysisError, match="unexpected skin outcome"):
        asyncio.run(provider.analyze_skin(decode_image(png_bytes, "image/png")))


def test_http_invalid_json_raises(png_bytes):
    provider = _provider(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(AnalysisError, match="invalid JSON"):
        asyncio.run(provider.analyze_skin(decode_image(png_bytes, "image/png")))


def test_http_transport_error_raises(png_bytes):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AnalysisError, match="unreachable"):
        asyncio.run(_provider(handler).analyze_skin(decode_image(png_bytes, "image/png")))


def test_build_provider_from_settings():
    stub = build_provider(Settings(analysis_provider="stub", analysis_delay_seconds=0.5, stub_failure=True))
    assert isinstance(stub, StubAnalysisProvider)
    assert stub.delay_seconds == 0.5 and stub.fail

    http = build_provider(Settings(analysis_provider="HTTP", analysis_base_url="http://x:9000/"))
    assert isinstance(http, HttpAnalysisProvider)
    assert http.base_url == "http://x:9000"

    assert isinstance(build_provider(Settings(analysis_provider="onnx")), StubAnalysisProvider)


def test_http_timeout_raises(png_bytes):
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(AnalysisError, match="timed out"):
        asyncio.run(_provider(handler).analyze_skin(decode_image(png_bytes, "image/png")))


def test_explicit_zero_timeout_is_kept():
    provider = HttpAnalysisProvider("http://inference.test", timeout=0)
    assert provider.timeout.read == 0
    assert provider.timeout.connect == 0
