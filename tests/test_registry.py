"""Unit tests for the generator registry (coldgen.codegen.registry).

Covers:
- Built-in targets and aliases
- Resolution errors
- Registration rules (type checks, alias conflicts, replace)
- Generator creation and wrapped construction errors
"""

from __future__ import annotations

import pytest

from coldgen.codegen.core.generator import CodeGenerator
from coldgen.codegen.languages import JavaGenerator, MongooseGenerator, TypeScriptGenerator
from coldgen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_registry,
    get_target_info,
    is_target_supported,
    list_all_target_info,
    list_supported_targets,
)

pytestmark = pytest.mark.unit


class DummyGenerator(CodeGenerator):
    @property
    def language_name(self):
        return "java"

    @property
    def file_extension(self):
        return ".txt"

    def generate_class(self, class_def):
        return class_def.name


# ---------------------------------------------------------------------------
# Global registry
# ---------------------------------------------------------------------------


class TestBuiltInTargets:
    def test_targets(self):
        assert list_supported_targets() == ["java", "mongoose", "typescript"]

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("java", JavaGenerator),
            ("TS", TypeScriptGenerator),
            ("javascript", TypeScriptGenerator),
            ("js", TypeScriptGenerator),
            ("schema", MongooseGenerator),
            ("mongoose", MongooseGenerator),
        ],
    )
    def test_aliases(self, name, expected):
        assert get_registry().get_generator_class(name) is expected

    def test_is_supported(self):
        assert is_target_supported("ts")
        assert not is_target_supported("cobol")

    def test_target_info(self):
        info = get_target_info("js")
        assert info["name"] == "typescript"
        assert info["class"] == "TypeScriptGenerator"
        assert info["aliases"] == ["javascript", "js", "ts"]
        assert set(list_all_target_info()) == {"java", "mongoose", "typescript"}

    def test_unknown_target(self):
        with pytest.raises(RegistryError, match="Available: java, mongoose, typescript"):
            get_registry().resolve_name("cobol")


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegistration:
    def test_rejects_non_generators(self):
        with pytest.raises(RegistryError):
            GeneratorRegistry().register("bad", dict)

    def test_alias_conflicts(self):
        registry = GeneratorRegistry()
        registry.register("one", DummyGenerator, aliases=["x"])
        with pytest.raises(RegistryError, match="already points"):
            registry.register("two", DummyGenerator, aliases=["x"])
        with pytest.raises(RegistryError, match="primary target"):
            registry.register("three", DummyGenerator, aliases=["one"])

    def test_existing_registration_kept_without_replace(self):
        registry = GeneratorRegistry()
        registry.register("one", DummyGenerator)
        registry.register("one", JavaGenerator)
        assert registry.get_generator_class("one") is DummyGenerator
        registry.register("one", JavaGenerator, replace=True)
        assert registry.get_generator_class("one") is JavaGenerator

    def test_unregister_removes_aliases(self):
        registry = GeneratorRegistry()
        registry.register("one", DummyGenerator, aliases=["uno"])
        registry.unregister("one")
        assert not registry.is_supported("one")
        assert not registry.is_supported("uno")
        assert registry.list_all_names() == {}


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestCreateGenerator:
    def test_create(self, model, config, definitions):
        generator = get_registry().create_generator("ts", model, config, definitions)
        assert isinstance(generator, TypeScriptGenerator)
        assert generator.model is model

    def test_construction_errors_are_wrapped(self, model, config, definitions):
        definitions.java["maven"] = {}
        with pytest.raises(RegistryError, match="Failed to create java generator"):
            get_registry().create_generator("java", model, config, definitions)
