"""Shared pytest fixtures for the coldgen test suite.

Provides reusable fixtures for:
- A sample domain document (abstract base, generic base, enum, subclasses)
- java / javascript / typescript definition documents
- A temporary project directory with coldConfig.json and definitions
- Pre-built config, definitions and domain model
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from coldgen.codegen.core.config import Definitions, ProjectConfig, build_config
from coldgen.codegen.core.resolver import DomainModel
from coldgen.codegen.core.types import TypeRegistries


# ---------------------------------------------------------------------------
# Definition documents
# ---------------------------------------------------------------------------

SAMPLE_DOMAIN: dict[str, Any] = {
    "common": {
        "Entity": {
            "type": "obj",
            "properties": {
                "classType": "ABSTRACT_CLASS",
                "implements": "Serializable",
                "desc": "Base of every stored document",
            },
            "attributes": {
                "id": {"type": "String", "desc": "Identifier"},
            },
        },
        "Holder": {
            "type": "obj",
            "properties": {"classType": "ABSTRACT_CLASS", "injection": "T"},
            "attributes": {
                "value": {"type": "T"},
                "items": {"type": "List", "injection": "T"},
            },
        },
    },
    "pets": {
        "Species": {
            "type": "obj",
            "properties": {"classType": "ENUM", "desc": "Kind of animal"},
            "attributes": ["DOG", {"CAT": {"desc": "Feline"}}],
        },
        "Foo": {
            "type": "obj",
            "attributes": {"label": {"type": "String"}},
        },
        "Animal": {
            "type": "obj",
            "properties": {
                "extends": "Entity",
                "annotate": "Document",
                "desc": "An animal",
            },
            "attributes": {
                "name": {"type": "String", "desc": "Name"},
                "species": {"type": "Species"},
                "tags": {"type": "Set", "injection": "Foo"},
                "born": {"type": "Date", "default": "LOCAL_DATE_TIME_NOW"},
            },
        },
        "Box": {
            "type": "obj",
            "properties": {"extends": {"Holder": {"injection": "Foo"}}},
            "attributes": {"size": {"type": "Integer"}},
        },
    },
    "readme": {"type": "doc"},
}

JAVA_DEFINITION: dict[str, Any] = {
    "maven": {
        "project": {
            "@xmlns": "http://maven.apache.org/POM/4.0.0",
            "modelVersion": "4.0.0",
            "groupId": "com.example",
            "artifactId": "pet-store",
            "version": "${libVer}",
        }
    },
    "typeMap": {
        "String": ["String", "string"],
        "Integer": ["Integer", "int"],
        "LocalDateTime": ["Date"],
    },
    "dependencyMap": {
        "Serializable": "java.io.Serializable",
        "Set": "java.util.Set",
        "HashSet": "java.util.HashSet",
        "List": "java.util.List",
        "ArrayList": "java.util.ArrayList",
        "LocalDateTime": "java.time.LocalDateTime",
        "@Document": "org.springframework.data.mongodb.core.mapping.Document",
    },
    "annotateDefaultVal": {"Document": {"collection": "animals"}},
}

JAVASCRIPT_DEFINITION: dict[str, Any] = {
    "javascriptTypeMap": {
        "string": ["String"],
        "number": ["Integer", "Long"],
        "Date": ["Date"],
    },
    "mongooseTypeMap": {
        "String": ["String"],
        "Number": ["Integer", "Long"],
        "Date": ["Date"],
    },
    "dependencyMap": {},
    "packageJavascript": {"name": "pet-store-models", "version": "0.0.0"},
    "packageMongoose": {"name": "pet-store-schemas", "version": "0.0.0"},
}

TYPESCRIPT_DEFINITION: dict[str, Any] = {
    "tsconfig": {"compilerOptions": {"target": "es2017", "module": "commonjs"}},
}

CONFIG_SETTINGS: dict[str, Any] = {
    "libVer": "1.2.3",
    "target": {"baseDir": "out"},
    "definition": {"baseDir": "definition"},
    "indentation": 4,
    "commentBlockMaxCharPerLine": 80,
}


@pytest.fixture
def sample_domain() -> dict[str, Any]:
    """Deep copy of the sample domain document."""
    return copy.deepcopy(SAMPLE_DOMAIN)


@pytest.fixture
def java_definition() -> dict[str, Any]:
    return copy.deepcopy(JAVA_DEFINITION)


@pytest.fixture
def javascript_definition() -> dict[str, Any]:
    return copy.deepcopy(JAVASCRIPT_DEFINITION)


@pytest.fixture
def typescript_definition() -> dict[str, Any]:
    return copy.deepcopy(TYPESCRIPT_DEFINITION)


# ---------------------------------------------------------------------------
# Project on disk
# ---------------------------------------------------------------------------


def write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def tmp_project_dir(
    tmp_path: Path,
    sample_domain: dict[str, Any],
    java_definition: dict[str, Any],
    javascript_definition: dict[str, Any],
    typescript_definition: dict[str, Any],
) -> Path:
    """Temporary project with coldConfig.json and all definition documents."""
    project_dir = tmp_path / "project"
    write_json(project_dir / "coldConfig.json", CONFIG_SETTINGS)
    definition_dir = project_dir / "definition"
    write_json(definition_dir / "domain.json", sample_domain)
    write_json(definition_dir / "java.json", java_definition)
    write_json(definition_dir / "javascript.json", javascript_definition)
    write_json(definition_dir / "typescript.json", typescript_definition)
    return project_dir


# ---------------------------------------------------------------------------
# Pre-built run values
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> ProjectConfig:
    """Run configuration writing under a temporary directory."""
    return build_config(CONFIG_SETTINGS, tmp_path)


@pytest.fixture
def definitions(
    sample_domain: dict[str, Any],
    java_definition: dict[str, Any],
    javascript_definition: dict[str, Any],
    typescript_definition: dict[str, Any],
) -> Definitions:
    return Definitions(
        domain=sample_domain,
        java=java_definition,
        javascript=javascript_definition,
        typescript=typescript_definition,
    )


@pytest.fixture
def registries(
    java_definition: dict[str, Any], javascript_definition: dict[str, Any]
) -> TypeRegistries:
    return TypeRegistries.from_definitions(java_definition, javascript_definition)


@pytest.fixture
def model(sample_domain: dict[str, Any], registries: TypeRegistries) -> DomainModel:
    return DomainModel.from_document(sample_domain, registries)


@pytest.fixture
def make_model(registries: TypeRegistries):
    """Factory building a model from an ad-hoc domain document."""

    def _make(document: dict[str, Any]) -> DomainModel:
        return DomainModel.from_document(document, registries)

    return _make


@pytest.fixture
def make_definitions(definitions: Definitions):
    """Factory replacing the domain document of the sample definitions."""

    def _make(document: dict[str, Any]) -> Definitions:
        return Definitions(
            domain=document,
            java=definitions.java,
            javascript=definitions.javascript,
            typescript=definitions.typescript,
        )

    return _make
