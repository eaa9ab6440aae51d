"""Unit tests for the Java class emitter (coldgen.codegen.languages.java).

Covers:
- Package root derived from the maven project
- Class, abstract class, generic class and enum output
- Imports from the java registry and the domain index
- Serializable marker and serialVersionUID (own and inherited)
- Builder and container methods
- Annotation defaults and unresolved annotation imports
- pom.xml descriptor
"""

from __future__ import annotations

import pytest

from coldgen.codegen.core.config import ConfigError
from coldgen.codegen.core.generator import generate_code
from coldgen.codegen.languages.java import (
    JavaGenerator,
    create_java_generator,
    format_annotation_arguments,
    import_package,
)

pytestmark = pytest.mark.unit

PACKAGE_DIR = "src/main/java/com/example/petstore/domain"


@pytest.fixture
def java_generator(model, config, definitions) -> JavaGenerator:
    return create_java_generator(model, config, definitions)


@pytest.fixture
def java_output(java_generator):
    """Run the generator and return a reader for files under its output dir."""
    result = generate_code(java_generator)
    assert result.success, result.error_message

    def read(relative: str) -> str:
        return (java_generator.output_dir / relative).read_text(encoding="utf-8")

    read.result = result
    return read


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_import_package(self):
        assert import_package("java.util.Map.Entry") == "java.util"
        assert import_package("com.example.domain.Foo") == "com.example.domain"

    def test_annotation_arguments(self):
        rendered = format_annotation_arguments(
            [("name", "users"), ("sparse", True), ("type", "Foo.class"), ("skip", None)]
        )
        assert rendered == '(name = "users", sparse = true, type = Foo.class)'
        assert format_annotation_arguments([]) == ""


class TestPackageRoot:
    def test_group_and_artifact_without_dashes(self, java_generator):
        assert java_generator.package_root == "com.example.petstore.domain"

    def test_package_of_nested_namespace(self, java_generator, model):
        animal = model.resolve_class("Animal")
        assert java_generator.type_mapper.package_of(animal) == (
            "com.example.petstore.domain.pets"
        )

    def test_placeholder_in_group_id(self, model, config, definitions):
        definitions.java["maven"]["project"]["groupId"] = "${libVer}"
        generator = JavaGenerator(model, config, definitions)
        assert generator.package_root == "1.2.3.petstore.domain"

    def test_missing_maven_project(self, model, config, definitions):
        del definitions.java["maven"]
        with pytest.raises(ConfigError, match="groupId"):
            JavaGenerator(model, config, definitions)


# ---------------------------------------------------------------------------
# Class output
# ---------------------------------------------------------------------------


class TestClassOutput:
    def test_simple_class(self, java_output):
        assert java_output(f"{PACKAGE_DIR}/pets/Foo.java") == (
            "package com.example.petstore.domain.pets;\n"
            "\n"
            "public class Foo {\n"
            "\n"
            "    private String label;\n"
            "\n"
            "    public Foo label(String label) {\n"
            "        this.label = label;\n"
            "        return this;\n"
            "    }\n"
            "}\n"
        )

    def test_imports_are_sorted_and_skip_own_package(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/pets/Animal.java")
        imports = [line for line in source.splitlines() if line.startswith("import ")]
        assert imports == [
            "import com.example.petstore.domain.common.Entity;",
            "import java.time.LocalDateTime;",
            "import java.util.HashSet;",
            "import java.util.Set;",
            "import org.springframework.data.mongodb.core.mapping.Document;",
        ]

    def test_declaration_comment_and_default_annotation(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/pets/Animal.java")
        assert (
            "/** An animal */\n"
            '@Document(collection = "animals")\n'
            "public class Animal extends Entity {\n"
        ) in source

    def test_inherited_serializable(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/pets/Animal.java")
        assert "    private static final long serialVersionUID = 1L;\n" in source

    def test_fields(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/pets/Animal.java")
        assert "    /** Name */\n    private String name;\n" in source
        assert "    private Species species;\n" in source
        assert "    private Set<Foo> tags;\n" in source
        assert "    private LocalDateTime born = LocalDateTime.now();\n" in source
        # inherited attributes stay on the parent
        assert "private String id;" not in source

    def test_container_methods(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/pets/Animal.java")
        assert (
            "    public Animal tags(Set<Foo> tags) {\n"
            "        this.tags = tags;\n"
            "        return this;\n"
            "    }\n"
        ) in source
        assert (
            "    public Animal initTags() {\n"
            "        if (this.tags == null) {\n"
            "            this.tags = new HashSet<>();\n"
            "        }\n"
            "        return this;\n"
            "    }\n"
        ) in source
        assert (
            "    public Animal addTags(Foo foo) {\n"
            "        initTags();\n"
            "        this.tags.add(foo);\n"
            "        return this;\n"
            "    }\n"
        ) in source
        assert "    public Animal removeTags(Foo foo) {\n" in source

    def test_abstract_serializable_class(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/common/Entity.java")
        assert "import java.io.Serializable;\n" in source
        assert "/** Base of every stored document */\n" in source
        assert "public abstract class Entity implements Serializable {\n" in source
        assert "serialVersionUID" in source
        assert "    /** Identifier */\n    private String id;\n" in source

    def test_generic_class(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/common/Holder.java")
        assert "public abstract class Holder<T> {\n" in source
        assert "    private T value;\n" in source
        assert "    private List<T> items;\n" in source
        assert "    public Holder<T> value(T value) {\n" in source
        assert "            this.items = new ArrayList<>();\n" in source
        assert "    public Holder<T> addItems(T t) {\n" in source
        assert "import java.util.ArrayList;\n" in source
        assert "serialVersionUID" not in source

    def test_extends_with_injection(self, java_output):
        source = java_output(f"{PACKAGE_DIR}/pets/Box.java")
        assert "import com.example.petstore.domain.common.Holder;\n" in source
        assert "public class Box extends Holder<Foo> {\n" in source
        assert "    private Integer size;\n" in source


class TestEnumOutput:
    def test_enum(self, java_output):
        assert java_output(f"{PACKAGE_DIR}/pets/Species.java") == (
            "package com.example.petstore.domain.pets;\n"
            "\n"
            "/** Kind of animal */\n"
            "public enum Species {\n"
            "    DOG,\n"
            "    /** Feline */\n"
            "    CAT;\n"
            "}\n"
        )


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------


class TestEdgeCases:
    def test_const_fields_get_no_builder(self, make_model, make_definitions, config):
        document = {
            "Limits": {
                "type": "obj",
                "attributes": {
                    "MAX": {"type": "Integer", "isConst": True, "isStatic": True,
                            "isPublic": True, "default": 10},
                },
            }
        }
        generator = JavaGenerator(make_model(document), config, make_definitions(document))
        assert generate_code(generator).success
        source = (generator.source_root / "com/example/petstore/domain/Limits.java").read_text()
        assert "    public static final Integer MAX = 10;\n" in source
        assert "public Limits MAX(" not in source

    def test_reserved_word_parameter(self, make_model, make_definitions, config):
        document = {
            "Class": {"type": "obj"},
            "Course": {
                "type": "obj",
                "attributes": {"classes": {"type": "List", "injection": "Class"}},
            },
        }
        generator = JavaGenerator(make_model(document), config, make_definitions(document))
        assert generate_code(generator).success
        source = (generator.source_root / "com/example/petstore/domain/Course.java").read_text()
        assert "    public Course addClasses(Class class_) {\n" in source

    def test_unresolved_dependencies_are_recorded(self, make_model, make_definitions, config):
        document = {
            "Gadget": {
                "type": "obj",
                "properties": {"annotate": "Entity"},
                "attributes": {"part": {"type": "Widget"}},
            }
        }
        generator = JavaGenerator(make_model(document), config, make_definitions(document))
        result = generate_code(generator)
        assert result.success
        assert result.unresolved == {"@Entity": ["Gadget"], "Widget": ["Gadget.part"]}
        source = (generator.source_root / "com/example/petstore/domain/Gadget.java").read_text()
        assert "import" not in source
        assert "@Entity\npublic class Gadget {\n" in source
        assert "    private Widget part;\n" in source


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------


class TestPom:
    def test_pom_written_with_substituted_version(self, java_output, java_generator):
        pom = java_output("pom.xml")
        assert pom.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        assert "    <artifactId>pet-store</artifactId>\n" in pom
        assert "    <version>1.2.3</version>\n" in pom
        assert java_generator.output_dir / "pom.xml" in java_output.result.files

    def test_no_maven_project_means_config_error_first(self, model, config, definitions):
        definitions.java["maven"] = {}
        with pytest.raises(ConfigError):
            JavaGenerator(model, config, definitions)
