"""Unit tests for domain document normalization (coldgen.codegen.core.domain).

Covers:
- Tree walk: packages, class nodes, ignored node types, depth-first order
- ClassType parsing and unknown classType
- extends / injection / annotate shape normalization
- Attribute parsing: defaults, flags, typeless attributes
- Enum constant shapes
"""

from __future__ import annotations

import pytest

from coldgen.codegen.core.domain import (
    Annotation,
    ClassRef,
    ClassType,
    EnumConstant,
    TypeParam,
    parse_annotations,
    parse_attribute,
    parse_class_ref,
    parse_domain,
    parse_enum_constants,
    parse_type_args,
    parse_type_params,
)
from coldgen.codegen.core.errors import DomainError

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Tree walk
# ---------------------------------------------------------------------------


class TestParseDomain:
    def test_depth_first_order(self, sample_domain):
        classes = parse_domain(sample_domain)
        assert [c.name for c in classes] == [
            "Entity",
            "Holder",
            "Species",
            "Foo",
            "Animal",
            "Box",
        ]

    def test_namespace_is_rooted_at_root_package(self, sample_domain):
        classes = {c.name: c for c in parse_domain(sample_domain)}
        assert classes["Entity"].namespace == ("domain", "common")
        assert classes["Animal"].package == "domain.pets"

    def test_custom_root_package(self):
        classes = parse_domain({"A": {"type": "obj"}}, root_package="model")
        assert classes[0].namespace == ("model",)

    def test_non_class_nodes_are_ignored(self):
        tree = {"notes": {"type": "doc"}, "A": {"type": "obj"}, "value": 3}
        assert [c.name for c in parse_domain(tree)] == ["A"]

    def test_document_must_be_object(self):
        with pytest.raises(DomainError):
            parse_domain(["A"])

    def test_class_types(self, sample_domain):
        classes = {c.name: c for c in parse_domain(sample_domain)}
        assert classes["Foo"].class_type is ClassType.CLASS
        assert classes["Entity"].is_abstract
        assert classes["Species"].is_enum
        assert not classes["Animal"].is_enum

    def test_unknown_class_type(self):
        with pytest.raises(DomainError, match="classType"):
            parse_domain({"A": {"type": "obj", "properties": {"classType": "STRUCT"}}})

    def test_attributes_must_be_object(self):
        with pytest.raises(DomainError):
            parse_domain({"A": {"type": "obj", "attributes": ["x"]}})


# ---------------------------------------------------------------------------
# Polymorphic shapes
# ---------------------------------------------------------------------------


class TestShapes:
    def test_extends_bare_name(self):
        assert parse_class_ref("Parent") == ClassRef("Parent")

    def test_extends_list_uses_first(self):
        assert parse_class_ref(["First", "Second"]) == ClassRef("First")

    def test_extends_object_with_injection(self):
        ref = parse_class_ref({"Holder": {"injection": ["Foo", "Bar"]}})
        assert ref == ClassRef("Holder", ("Foo", "Bar"))

    def test_extends_empty(self):
        assert parse_class_ref(None) is None
        assert parse_class_ref("") is None

    def test_type_args_shapes(self):
        assert parse_type_args("Foo") == ("Foo",)
        assert parse_type_args(["Foo", {"Bar": {}}]) == ("Foo", "Bar")
        assert parse_type_args(None) == ()

    def test_type_params_with_bound(self):
        params = parse_type_params([{"T": {"extends": "Entity"}}, "U"])
        assert params == (TypeParam("T", "Entity"), TypeParam("U"))

    def test_unsupported_injection(self):
        with pytest.raises(DomainError):
            parse_type_args(42)

    def test_annotations_shapes(self):
        annotations = parse_annotations(
            ["Id", {"Indexed": {"unique": True}, "Field": "\"name\"", "Version": ""}]
        )
        assert annotations == (
            Annotation("Id"),
            Annotation("Indexed", arguments=(("unique", True),)),
            Annotation("Field", text="\"name\""),
            Annotation("Version"),
        )
        assert annotations[0].is_bare
        assert not annotations[1].is_bare


# ---------------------------------------------------------------------------
# Attributes and enum constants
# ---------------------------------------------------------------------------


class TestAttributes:
    def test_flags_and_default(self):
        attribute = parse_attribute(
            "A",
            "active",
            {"type": "Boolean", "default": True, "isPublic": True, "isStatic": True},
        )
        assert attribute.default == "true"
        assert attribute.is_public and attribute.is_static
        assert not attribute.is_const

    def test_container_element_type(self):
        attribute = parse_attribute("A", "tags", {"type": "Set", "injection": "Foo"})
        assert attribute.is_container
        assert attribute.element_type == "Foo"

    def test_container_without_element(self):
        attribute = parse_attribute("A", "tags", {"type": "List"})
        assert attribute.is_container
        assert attribute.element_type is None

    def test_typeless_attribute_is_skipped(self):
        assert parse_attribute("A", "broken", {"desc": "no type"}) is None

    def test_list_description(self):
        attribute = parse_attribute("A", "x", {"type": "String", "desc": ["one", "two"]})
        assert attribute.desc == ("one", "two")


class TestEnumConstants:
    def test_list_of_names_and_objects(self):
        constants = parse_enum_constants(["DOG", {"CAT": {"desc": "Feline"}}])
        assert constants == (EnumConstant("DOG"), EnumConstant("CAT", "Feline"))

    def test_mapping(self):
        constants = parse_enum_constants({"RED": {}, "BLUE": {"desc": "Sky"}})
        assert [c.name for c in constants] == ["RED", "BLUE"]
        assert constants[1].desc == "Sky"
