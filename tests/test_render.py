"""Tests for terminal rendering (cli/render.py).

Pure helpers are tested directly; rendering paths are exercised with
and without Rich and checked through captured output.
"""

from __future__ import annotations

import json
import sys

import pytest

from container_deck.cli.render import (
    _platform,
    _short_digest,
    container_rows,
    format_plain_table,
    image_rows,
    render_history,
    render_images,
    render_json,
    render_lines,
    render_status,
)
from container_deck.core.models import ContainerImage, ContainerSummary, SystemStatus


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("rich", "rich.console", "rich.table", "rich.tree", "rich.markup"):
        monkeypatch.setitem(sys.modules, name, None)


def _image(**overrides: str) -> ContainerImage:
    defaults = {
        "name": "alpine",
        "tag": "latest",
        "index_digest": "sha256:0123456789abcdef0123",
        "os": "linux",
        "arch": "arm64",
        "size": "3.9 MB",
    }
    defaults.update(overrides)
    return ContainerImage(**defaults)


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_short_digest(self) -> None:
        assert _short_digest("sha256:0123456789abcdef0123") == "0123456789ab"

    def test_short_digest_empty(self) -> None:
        assert _short_digest("") == "—"

    def test_platform(self) -> None:
        assert _platform("linux", "arm64", "v8") == "linux/arm64/v8"
        assert _platform("", "") == "—"

    def test_image_rows(self) -> None:
        headers, rows = image_rows([_image(tag="", created="")])
        assert headers[0] == "Name"
        assert rows == [("alpine", "—", "linux/arm64", "3.9 MB", "—", "0123456789ab")]

    def test_container_rows(self) -> None:
        _headers, rows = container_rows(
            [ContainerSummary(id="web", image="nginx", state="running")],
        )
        assert rows == [("web", "nginx", "—", "running", "—")]

    def test_plain_table_alignment(self) -> None:
        text = format_plain_table(("A", "BB"), [("xyz", "1"), ("q", "22")])
        assert text.splitlines() == [
            "A    BB",
            "xyz  1",
            "q    22",
        ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestRenderPlain:
    def test_images_without_rich(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)
        render_images([_image()])
        out = capsys.readouterr().out
        assert out.splitlines()[0].startswith("Name")
        assert "alpine" in out

    def test_empty_listing_message(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)
        render_images([])
        assert capsys.readouterr().out.strip() == "No images found."

    def test_history_without_rich(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)
        render_history("alpine:latest", ["ADD rootfs /", "CMD sh"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["alpine:latest", "    1. ADD rootfs /", "    2. CMD sh"]

    def test_status_without_rich(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)
        render_status(SystemStatus(running=False, detail="apiserver is not running"), None)
        out = capsys.readouterr().out
        assert "Status: Stopped" in out
        assert "Version: unknown" in out
        assert "apiserver is not running" in out


class TestRenderRich:
    def test_images_with_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        pytest.importorskip("rich")
        render_images([_image(name="registry/[weird]")])
        out = capsys.readouterr().out
        assert "registry/[weird]" in out

    def test_history_with_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        pytest.importorskip("rich")
        render_history("alpine:latest", ['CMD ["/bin/sh"]'])
        out = capsys.readouterr().out
        assert 'CMD ["/bin/sh"]' in out


class TestRenderOther:
    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        render_json([_image()])
        data = json.loads(capsys.readouterr().out)
        assert data[0]["name"] == "alpine"
        assert data[0]["index_digest"].startswith("sha256:")

    def test_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        render_lines("DNS domains", ["test", "local"])
        assert capsys.readouterr().out.splitlines() == ["test", "local"]
