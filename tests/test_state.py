"""Tests for core.state models."""

import pytest

from core.state import (
    FileEntry,
    MultiFileProject,
    PipelineResponse,
    RequirementRecord,
    Role,
    SingleDocument,
)


def test_file_entry_creation():
    f = FileEntry(path="src/App.jsx", content="export default 1", language="javascript")
    assert f.path == "src/App.jsx"
    assert f.language == "javascript"


def test_record_defaults():
    record = RequirementRecord()
    assert record.app_type is None
    assert record.features == set()
    assert record.stack == []
    assert record.database is False
    assert record.complexity == "simple"


@pytest.mark.parametrize("count,expected", [
    (0, "simple"), (2, "simple"), (3, "medium"), (5, "medium"), (6, "complex"),
])
def test_complexity_derived_from_feature_count(count, expected):
    record = RequirementRecord(features={f"f{i}" for i in range(count)})
    assert record.complexity == expected


def test_freeze_blocks_mutation():
    record = RequirementRecord(app_type="blog", features={"seo"}, stack=["React"]).freeze()
    assert record.frozen
    with pytest.raises(AttributeError):
        record.app_type = "crm"
    with pytest.raises(AttributeError):
        record.features.add("auth")
    with pytest.raises(AttributeError):
        record.stack.append("Vue.js")


def test_freeze_is_idempotent():
    record = RequirementRecord().freeze()
    assert record.freeze() is record


def test_thawed_copy_is_editable():
    record = RequirementRecord(app_type="blog", features={"seo"}).freeze()
    copy = record.thawed_copy()
    copy.features.add("auth")
    copy.app_type = "crm"
    assert not copy.frozen
    assert record.features == frozenset({"seo"})
    assert record.app_type == "blog"


def test_role_is_immutable():
    role = Role(id="architect", display_name="Architect", domain_instructions="...", priority=1)
    with pytest.raises(AttributeError):
        role.priority = 9


def test_artifact_kinds():
    single = SingleDocument(content="<html></html>")
    multi = MultiFileProject(
        name="app", files=[FileEntry(path="a.js", content="", language="javascript")],
        entry_file="a.js", setup_notes="",
    )
    assert single.kind == "single"
    assert multi.kind == "multi"
    assert multi.salvaged is False


def test_multi_file_project_needs_files():
    with pytest.raises(ValueError):
        MultiFileProject(name="app", files=[], entry_file="", setup_notes="")


def test_pipeline_response_defaults():
    response = PipelineResponse(kind="answer", message="hi")
    assert response.artifact is None
    assert response.role_results == []
    assert response.suggested_defaults == {}
