"""Tests for the local image check script."""

import asyncio

from conftest import StubClient
from realcheck.core.config import Settings
from realcheck.scripts import check_image


def _patch(mocker, stub):
    mocker.patch.object(check_image, "load_settings", return_value=Settings(gemini_api_key="k"))
    mocker.patch.object(check_image, "GeminiClient", return_value=stub)


def test_check_prints_verdict(mocker, tmp_path, capsys):
    stub = StubClient()
    _patch(mocker, stub)
    img = tmp_path / "photo.png"
    img.write_bytes(b"\x89PNG\r\n\x1a\n")

    code = asyncio.run(check_image.check(img))

    assert code == 0
    assert '"is_ai": true' in capsys.readouterr().out
    image, mime_type, _ = stub.calls[0]
    assert image == b"\x89PNG\r\n\x1a\n"
    assert mime_type == "image/png"


def test_check_missing_file(mocker, tmp_path):
    _patch(mocker, StubClient())

    assert asyncio.run(check_image.check(tmp_path / "missing.jpg")) == 1


def test_check_reports_unparsable_output(mocker, tmp_path, capsys):
    _patch(mocker, StubClient(text="no idea"))
    img = tmp_path / "photo.jpg"
    img.write_bytes(b"\xff\xd8\xff")

    code = asyncio.run(check_image.check(img))

    assert code == 1
    assert "no idea" in capsys.readouterr().out
