"""
Java code generator implementation.

Generates one builder-style Java class (or enum) per domain class plus the
Maven ``pom.xml`` of the library.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ....logging_config import get_logger
from ...core.config import ConfigError, Definitions, ProjectConfig
from ...core.descriptors import build_xml, substitute_placeholder
from ...core.domain import CONTAINER_TYPES, Annotation, AttributeDef, ClassDef
from ...core.generator import CodeGenerator, ProgressSink
from ...core.naming import NamingCase, first_upper
from ...core.resolver import DomainModel
from .naming import create_java_sanitizer
from .types import JavaTypeMapper, format_annotation_arguments

logger = get_logger(__name__)

SERIALIZABLE_MARKER = "Serializable"
TIMESTAMP_SENTINEL = "LOCAL_DATE_TIME_NOW"
TIMESTAMP_EXPRESSION = "LocalDateTime.now()"

# (name, params, body lines) of a generated method
Method = Tuple[str, str, List[str]]


class JavaGenerator(CodeGenerator):
    """Code generator for Java domain classes."""

    def __init__(
        self,
        model: DomainModel,
        config: ProjectConfig,
        definitions: Definitions,
        progress: Optional[ProgressSink] = None,
    ):
        """Initialize Java generator with configuration."""
        super().__init__(model, config, definitions, progress)

        self.sanitizer = create_java_sanitizer()
        self.package_root = self._build_package_root()
        self.type_mapper = JavaTypeMapper(
            model, self.package_root, on_unresolved=self.record_unresolved
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the Java templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def _build_package_root(self) -> str:
        """``<groupId>.<artifactId without dashes>.<root package>`` from the maven project."""
        project = self.definitions.maven.get("project") or {}
        group_id = project.get("groupId")
        artifact_id = project.get("artifactId")
        if not group_id or not artifact_id:
            raise ConfigError(
                "Java definition must declare maven project groupId and artifactId"
            )
        group_id = substitute_placeholder(str(group_id), self.config.settings)
        artifact_id = substitute_placeholder(str(artifact_id), self.config.settings)
        return f"{group_id}.{artifact_id.replace('-', '')}.{self.model.root_package}"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    @property
    def source_root(self) -> Path:
        return self.output_dir / "src" / "main" / "java"

    def namespace_path(self, class_def: ClassDef) -> Path:
        return Path(*self.type_mapper.package_of(class_def).split("."))

    def write_descriptors(self):
        """Write pom.xml from the maven structure of the java definition."""
        maven = self.definitions.maven
        if not maven:
            logger.warning("No maven definition found, pom.xml not generated")
            return
        pom = build_xml(maven, self.config.settings, indent=self.indent)
        self.write_file(self.output_dir / "pom.xml", pom)

    def generate_class(self, class_def: ClassDef) -> str:
        """Generate Java source for a single class or enum using templates."""
        context = {
            "indent": self.indent,
            "package": self.type_mapper.package_of(class_def),
            "imports": self.type_mapper.collect_imports(class_def),
            "comment": self.comment(class_def.desc),
            "annotations": self._annotation_lines(
                class_def.annotations, use_defaults=True
            ),
            "declaration": self._declaration(class_def),
        }

        if class_def.is_enum:
            last = len(class_def.constants) - 1
            context["constants"] = [
                {
                    "name": constant.name,
                    "comment": self.comment(constant.desc),
                    "separator": ";" if index == last else ",",
                }
                for index, constant in enumerate(class_def.constants)
            ]
            return self.render_template("enum.java.j2", context)

        return_type = self._return_type(class_def)
        context.update(
            {
                "serial_version_uid": self.model.implements_marker(
                    class_def.name, SERIALIZABLE_MARKER
                ),
                "fields": [self._field_data(attr) for attr in class_def.attributes],
                "methods": [
                    {"lines": self._method_lines(return_type, *method)}
                    for method in self._builder_methods(class_def.attributes)
                ],
            }
        )
        return self.render_template("class.java.j2", context)

    # Declarations

    def _declaration(self, class_def: ClassDef) -> str:
        if class_def.is_enum:
            kind = "enum"
        elif class_def.is_abstract:
            kind = "abstract class"
        else:
            kind = "class"

        declaration = f"public {kind} {class_def.name}"
        if class_def.type_params:
            params = ", ".join(
                f"{param.name} extends {param.bound}" if param.bound else param.name
                for param in class_def.type_params
            )
            declaration += f"<{params}>"
        if class_def.extends is not None:
            parent = self.type_mapper.type_expression(
                class_def.extends.name, class_def.extends.type_args
            )
            declaration += f" extends {parent}"
        if class_def.implements:
            declaration += f" implements {', '.join(class_def.implements)}"
        return declaration

    def _return_type(self, class_def: ClassDef) -> str:
        if not class_def.type_params:
            return class_def.name
        return f"{class_def.name}<{', '.join(class_def.type_param_names)}>"

    def _annotation_lines(
        self, annotations: Tuple[Annotation, ...], use_defaults: bool = False
    ) -> List[str]:
        """Render annotations; bare class annotations take their registered default."""
        lines = []
        for annotation in annotations:
            if annotation.text:
                lines.append(f"@{annotation.name}({annotation.text})")
            elif annotation.arguments:
                arguments = format_annotation_arguments(annotation.arguments)
                lines.append(f"@{annotation.name}{arguments}")
            elif use_defaults:
                lines.append(f"@{annotation.name}{self._annotation_default(annotation.name)}")
            else:
                lines.append(f"@{annotation.name}")
        return lines

    def _annotation_default(self, name: str) -> str:
        default = self.definitions.annotation_defaults.get(name)
        if isinstance(default, dict):
            return format_annotation_arguments(default.items())
        if default:
            return f"({default})"
        return ""

    def _field_data(self, attribute: AttributeDef) -> Dict[str, Any]:
        modifiers = ["public" if attribute.is_public else "private"]
        if attribute.is_static:
            modifiers.append("static")
        if attribute.is_const:
            modifiers.append("final")

        declaration = (
            f"{' '.join(modifiers)} {self.type_mapper.attribute_type(attribute)} "
            f"{attribute.name}"
        )
        if attribute.default == TIMESTAMP_SENTINEL:
            declaration += f" = {TIMESTAMP_EXPRESSION}"
        elif attribute.default:
            declaration += f" = {attribute.default}"

        return {
            "comment": self.comment(attribute.desc),
            "annotations": self._annotation_lines(attribute.annotations),
            "declaration": declaration,
        }

    # Builder methods

    def _method_lines(
        self, return_type: str, name: str, params: str, body: List[str]
    ) -> List[str]:
        lines = [f"public {return_type} {name}({params}) {{"]
        lines.extend(f"{self.indent}{line}" for line in body)
        lines.append("}")
        return lines

    def _builder_methods(self, attributes: Tuple[AttributeDef, ...]) -> List[Method]:
        """(name, params, body) of the builder methods, in attribute order."""
        methods: List[Method] = []
        for attribute in attributes:
            if attribute.is_const:
                continue
            name = attribute.name
            methods.append(
                (
                    name,
                    f"{self.type_mapper.attribute_type(attribute)} {name}",
                    [f"this.{name} = {name};", "return this;"],
                )
            )
            if attribute.is_container:
                methods.extend(self._container_methods(attribute))
        return methods

    def _container_methods(self, attribute: AttributeDef) -> List[Method]:
        """init/add/remove methods of a Set or List attribute."""
        name = attribute.name
        suffix = first_upper(name)
        implementation = CONTAINER_TYPES[attribute.type]
        element = (
            self.type_mapper.java_name(attribute.element_type)
            if attribute.element_type
            else "Object"
        )
        param = self.sanitizer.sanitize_name(element, NamingCase.CAMEL_CASE)

        return [
            (
                f"init{suffix}",
                "",
                [
                    f"if (this.{name} == null) {{",
                    f"{self.indent}this.{name} = new {implementation}<>();",
                    "}",
                    "return this;",
                ],
            ),
            (
                f"add{suffix}",
                f"{element} {param}",
                [f"init{suffix}();", f"this.{name}.add({param});", "return this;"],
            ),
            (
                f"remove{suffix}",
                f"{element} {param}",
                [f"init{suffix}();", f"this.{name}.remove({param});", "return this;"],
            ),
        ]


def create_java_generator(
    model: DomainModel,
    config: ProjectConfig,
    definitions: Definitions,
    progress: Optional[ProgressSink] = None,
) -> JavaGenerator:
    """Create a Java generator."""
    return JavaGenerator(model, config, definitions, progress)
