"""Shared fixtures for docrender tests."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING

import pytest

from docrender.config import DocrenderConfig
from docrender.types import Comment, ProjectReflection, Reflection, SourceReference

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def project() -> ProjectReflection:
    """A small documentation model with a module, a class and a function."""
    method = Reflection(
        id=3,
        name="start",
        kind="Method",
        comment=Comment(summary="Start the motor.", tags=(("returns", "True on success"),)),
        sources=(SourceReference(file_name="src/motor.ts", line=42),),
    )
    motor = Reflection(
        id=2,
        name="Motor",
        kind="Class",
        comment=Comment(summary="Drives a <stepper> motor."),
        children=(method,),
    )
    helper = Reflection(id=4, name="clamp", kind="Function")
    module = Reflection(id=1, name="motor", kind="Module", children=(motor,))
    return ProjectReflection(
        name="motor-ctrl",
        version="1.2.0",
        readme="Motor control library.",
        children=(module, helper),
    )


@pytest.fixture
def config() -> DocrenderConfig:
    """Default config; tests opt renderers in by setting ``out``."""
    return DocrenderConfig()


@pytest.fixture
def model_file(tmp_path: Path, project: ProjectReflection) -> Path:
    """The sample project written in serializer format."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(asdict(project)), encoding="utf-8")
    return path
