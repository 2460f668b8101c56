import pathlib as pl

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class FakeSession:
    """Answers package index lookups from a fixed set of known names."""

    def __init__(self, known=(), failing=()):
        self.known = set(known)
        self.failing = set(failing)
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        name = url.rsplit("/", 2)[-2]
        if name in self.failing:
            raise requests.ConnectionError(f"cannot reach index for {name}")
        return FakeResponse(200 if name in self.known else 404)


@pytest.fixture()
def make_session():
    return FakeSession


@pytest.fixture()
def write_script(tmp_path):
    def _write(content: str, name: str = "app.py") -> pl.Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _no_template_override(monkeypatch):
    monkeypatch.delenv("DOCKERFILE_TEMPLATE", raising=False)
