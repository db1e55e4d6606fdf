"""Shared fixtures."""

import os

import pytest
from PIL import Image

from formrules.core.config import reset_config
from formrules.validation.files import UploadedFile


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in list(os.environ):
        if name.startswith("FORMRULES_"):
            monkeypatch.delenv(name)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def png_path(tmp_path):
    """A 1920x1080 PNG on disk."""
    path = tmp_path / "upload-image"
    Image.new("RGB", (1920, 1080), color=(30, 120, 200)).save(path, format="PNG")
    return path


@pytest.fixture
def png_upload(png_path):
    return UploadedFile(
        name="screen.png",
        tmp_name=str(png_path),
        size=png_path.stat().st_size,
        type="image/png",
    )


@pytest.fixture
def text_upload(tmp_path):
    path = tmp_path / "upload-text"
    path.write_text("plain text\n")
    return UploadedFile(name="notes.txt", tmp_name=str(path), size=path.stat().st_size)
