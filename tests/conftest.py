"""Pytest fixtures for the intake workflow tests."""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from intake.main import app
from intake.services.providers import StubAnalysisProvider
from intake.services.session_manager import session_manager


VALID_VITALS = {
    "age": "29",
    "systolicBP": "120",
    "diastolicBP": "80",
    "bloodSugar": "95",
    "bodyTemp": "36.8",
    "heartRate": "72",
}


@pytest.fixture
def vitals():
    return dict(VALID_VITALS)


@pytest.fixture(scope="session")
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 3), color=(200, 120, 90)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def stub_provider():
    return StubAnalysisProvider(delay_seconds=0)


@pytest.fixture
def client(monkeypatch, stub_provider):
    monkeypatch.setattr(session_manager, "_provider", stub_provider)
    with TestClient(app) as c:
        yield c
