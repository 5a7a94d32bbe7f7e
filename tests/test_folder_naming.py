"""Tests for utils.folder_naming."""

import os

import pytest

from core.state import FileEntry, MultiFileProject
from utils.folder_naming import (
    extract_project_name,
    resolve_inside,
    slugify,
    unique_dir,
    write_project,
)


def _project(name="Notes API", files=None):
    files = files or [
        FileEntry(path="package.json", content="{}", language="json"),
        FileEntry(path="src/server.js", content="listen()", language="javascript"),
    ]
    return MultiFileProject(name=name, files=files, entry_file="src/server.js", setup_notes="")


class TestNaming:
    def test_slugify(self):
        assert slugify("  My Cool_App  ") == "my-cool-app"
        assert slugify("Notes API!") == "notes-api"

    def test_name_skips_filler_words(self):
        assert extract_project_name("crée une todo list") == "todo-list"
        assert extract_project_name("Build me a React dashboard for sales") == "react-dashboard-sales"

    def test_name_keeps_three_words(self):
        assert extract_project_name("weather radar map tracker") == "weather-radar-map"

    @pytest.mark.parametrize("request_text", ["", None, "build me an app", "!!!"])
    def test_name_fallback(self, request_text):
        assert extract_project_name(request_text) == "project"


class TestPaths:
    def test_resolve_inside(self, tmp_path):
        path = resolve_inside(str(tmp_path), "src/app.js")
        assert path == os.path.join(os.path.realpath(tmp_path), "src", "app.js")

    @pytest.mark.parametrize("bad", ["../escape.txt", "src/../../escape.txt", "/etc/passwd"])
    def test_resolve_rejects_escape(self, tmp_path, bad):
        with pytest.raises(ValueError):
            resolve_inside(str(tmp_path), bad)

    def test_unique_dir(self, tmp_path):
        base = str(tmp_path / "app")
        assert unique_dir(base) == base
        os.makedirs(base)
        assert unique_dir(base) == base + "-2"
        os.makedirs(base + "-2")
        assert unique_dir(base) == base + "-3"


class TestWriteProject:
    def test_writes_every_file(self, tmp_path):
        target = write_project(_project(), str(tmp_path))
        assert os.path.basename(target) == "notes-api"
        with open(os.path.join(target, "src", "server.js")) as f:
            assert f.read() == "listen()"
        assert os.path.exists(os.path.join(target, "package.json"))

    def test_second_write_gets_fresh_folder(self, tmp_path):
        first = write_project(_project(), str(tmp_path))
        second = write_project(_project(), str(tmp_path))
        assert first != second
        assert second.endswith("notes-api-2")

    def test_escaping_path_refused_before_any_write(self, tmp_path):
        project = _project(files=[
            FileEntry(path="index.html", content="<p>ok</p>", language="html"),
            FileEntry(path="../evil.sh", content="", language="shell"),
        ])
        with pytest.raises(ValueError):
            write_project(project, str(tmp_path))
        assert os.listdir(tmp_path) == []

    def test_non_ascii_content_written_as_utf8(self, tmp_path):
        text = "<h1>Crée ta liste à faire, déjà prête</h1>"
        project = _project(files=[FileEntry(path="index.html", content=text, language="html")])
        target = write_project(project, str(tmp_path))
        with open(os.path.join(target, "index.html"), "rb") as f:
            assert f.read().decode("utf-8") == text
