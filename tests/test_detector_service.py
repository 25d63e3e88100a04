"""Tests for the image detector pipeline with a stubbed model."""

import asyncio

import pytest

from conftest import StubClient
from realcheck.core.errors import (
    MalformedInput,
    MissingInput,
    RemoteCallFailure,
    UnparsableModelOutput,
)
from realcheck.models.detection_models import ImageSubmission
from realcheck.services.detector_service import ImageDetector
from realcheck.services.prompt_manager import PromptManager


def _analyze(detector: ImageDetector, image_base64):
    return asyncio.run(detector.analyze(ImageSubmission(imageBase64=image_base64)))


def test_analyze_returns_model_verdict():
    stub = StubClient()
    detector = ImageDetector(stub)

    result = _analyze(detector, "data:image/jpeg;base64,AAAA")

    assert result == {"is_ai": True, "confidence": 87, "reason": "unnatural texture"}


def test_analyze_sends_image_and_instruction_once():
    stub = StubClient()
    detector = ImageDetector(stub)

    _analyze(detector, "data:image/png;base64,AAAA")

    assert len(stub.calls) == 1
    image, mime_type, instruction = stub.calls[0]
    assert image == b"\x00\x00\x00"
    assert mime_type == "image/png"
    assert "is_ai" in instruction
    assert "confidence" in instruction
    assert "reason" in instruction


def test_analyze_is_repeatable():
    detector = ImageDetector(StubClient())

    first = _analyze(detector, "data:image/jpeg;base64,AAAA")
    second = _analyze(detector, "data:image/jpeg;base64,AAAA")

    assert first == second


@pytest.mark.parametrize("value", [None, ""])
def test_missing_image_fails_before_calling_model(value):
    stub = StubClient()

    with pytest.raises(MissingInput):
        _analyze(ImageDetector(stub), value)

    assert stub.calls == []


def test_malformed_image_fails_before_calling_model():
    stub = StubClient()

    with pytest.raises(MalformedInput):
        _analyze(ImageDetector(stub), "AAAA")

    assert stub.calls == []


def test_prose_output_raises_unparsable():
    stub = StubClient(text="Honestly, this looks like a real photo.")

    with pytest.raises(UnparsableModelOutput) as exc_info:
        _analyze(ImageDetector(stub), "data:image/jpeg;base64,AAAA")

    assert exc_info.value.model_output == "Honestly, this looks like a real photo."


def test_client_exception_becomes_remote_call_failure():
    stub = StubClient(error=TimeoutError("deadline exceeded"))

    with pytest.raises(RemoteCallFailure) as exc_info:
        _analyze(ImageDetector(stub), "data:image/jpeg;base64,AAAA")

    assert exc_info.value.details == "TimeoutError"
    assert exc_info.value.status_code == 500


def test_custom_prompt_directory(tmp_path):
    (tmp_path / "ai_detection.txt").write_text("Custom instruction\n", encoding="utf-8")
    stub = StubClient()

    _analyze(ImageDetector(stub, PromptManager(tmp_path)), "data:image/jpeg;base64,AAAA")

    assert stub.calls[0][2] == "Custom instruction"


def test_missing_prompt_file_lists_search_paths(tmp_path):
    manager = PromptManager(tmp_path)

    with pytest.raises(FileNotFoundError) as exc_info:
        manager.load_prompt("does_not_exist")

    assert str(tmp_path) in str(exc_info.value)
