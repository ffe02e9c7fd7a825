import time

import pytest
import requests

from courtvision.analytics import SessionController, SessionHistory
from courtvision.config import reset_settings
from courtvision.core import (
    CourtCalibration, CalibrationCircle, CalibrationRectangle, ShotDetectionPipeline
)
from courtvision.pipeline import MockShotPipeline


class RecordingPipeline(ShotDetectionPipeline):
    """Detection stand-in that records lifecycle calls"""

    def __init__(self, fail_on_start=False):
        super().__init__()
        self.calls = []
        self.frames = 0
        self.fail_on_start = fail_on_start
        self._active = False

    @property
    def is_active(self):
        return self._active

    def start_session(self, calibration):
        self.calls.append(('start', calibration))
        if self.fail_on_start:
            raise RuntimeError("detector crashed")
        self._active = True

    def stop_session(self):
        self.calls.append(('stop', None))
        self._active = False

    def process_frame(self, frame, calibration):
        self.frames += 1

    def emit(self, event):
        self.on_shot_event(event)


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text
        self.headers = {'Content-Type': 'application/json'} if body is not None else {'Content-Type': 'text/plain'}

    def json(self):
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, json=None, timeout=None):
        self.requests.append((method, url, json, timeout))
        if self.error:
            raise self.error
        return self.response


class HtmlJsonResponse(FakeResponse):
    """Claims JSON but carries an HTML error page"""

    def __init__(self):
        super().__init__(body={}, text="<html>oops</html>")

    def json(self):
        raise requests.JSONDecodeError("Expecting value", self.text, 0)


def wait_for(predicate, timeout=2.0, interval=0.01):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("COURTVISION_CONFIG", str(tmp_path / "missing.json"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def valid_calibration():
    return CourtCalibration()


@pytest.fixture
def invalid_calibration():
    return CourtCalibration(rim=CalibrationCircle(center=(0.5, 0.3), radius=0.0))


@pytest.fixture
def recording_pipeline():
    return RecordingPipeline()


@pytest.fixture
def controller(recording_pipeline):
    return SessionController(recording_pipeline, history=SessionHistory())


@pytest.fixture
def mock_pipeline():
    return MockShotPipeline(emit_interval=None, seed=42)
