"""Tests for docrender.types — documentation model and loading."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

import pytest

from docrender.exceptions import ModelError
from docrender.types import Comment, ProjectReflection, Reflection, load_project, project_from_dict

if TYPE_CHECKING:
    from pathlib import Path


class TestModel:
    def test_frozen(self, project: ProjectReflection):
        with pytest.raises(dataclasses.FrozenInstanceError):
            project.name = "other"  # type: ignore[misc]

    def test_walk_depth_first(self, project: ProjectReflection):
        assert [r.name for r in project.walk()] == ["motor", "Motor", "start", "clamp"]

    def test_defaults(self):
        r = Reflection(id=1, name="x", kind="Variable")
        assert r.comment is None
        assert r.children == ()
        assert r.sources == ()


class TestProjectFromDict:
    def test_minimal(self):
        project = project_from_dict({"name": "empty"})
        assert project == ProjectReflection(name="empty")

    def test_comment_tags(self):
        project = project_from_dict(
            {
                "name": "p",
                "children": [
                    {
                        "id": 1,
                        "name": "f",
                        "kind": "Function",
                        "comment": {"summary": "s", "tags": [["param", "x"]]},
                    }
                ],
            }
        )
        assert project.children[0].comment == Comment(summary="s", tags=(("param", "x"),))

    def test_missing_name_raises(self):
        with pytest.raises(ModelError, match="Malformed"):
            project_from_dict({"children": []})

    def test_bad_child_raises(self):
        with pytest.raises(ModelError):
            project_from_dict({"name": "p", "children": [{"id": "nan", "name": "x"}]})

    def test_comment_not_object_raises(self):
        child = {"id": 1, "name": "f", "kind": "Function", "comment": "text"}
        with pytest.raises(ModelError, match="comment .* is not an object"):
            project_from_dict({"name": "p", "children": [child]})

    def test_child_not_object_raises(self):
        with pytest.raises(ModelError, match="reflection .* is not an object"):
            project_from_dict({"name": "p", "children": ["f"]})

    def test_source_not_object_raises(self):
        child = {"id": 1, "name": "f", "kind": "Function", "sources": ["a.ts"]}
        with pytest.raises(ModelError, match="Malformed"):
            project_from_dict({"name": "p", "children": [child]})

    def test_children_not_list_raises(self):
        with pytest.raises(ModelError, match="Malformed"):
            project_from_dict({"name": "p", "children": 5})


class TestLoadProject:
    def test_load(self, model_file: Path, project: ProjectReflection):
        assert load_project(model_file) == project

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ModelError, match="not found"):
            load_project(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ModelError, match="Failed to load model"):
            load_project(path)

    def test_non_object_raises(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ModelError, match="JSON object"):
            load_project(path)
