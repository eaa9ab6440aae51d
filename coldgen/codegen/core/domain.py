"""
Normalized domain model.

The raw domain document allows several shapes for the same concept
(``extends`` may be a bare name, a list or an object, ``injection`` may be a
string, a list of strings or objects, ...). Everything is converted here,
once, into small frozen dataclasses so the resolver and the emitters never
have to sniff shapes again.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .errors import DomainError

logger = get_logger(__name__)

CLASS_NODE_TYPE = "obj"
DEFAULT_ROOT_PACKAGE = "domain"

# Container markers and the implementation used to initialize them
CONTAINER_TYPES = {"Set": "HashSet", "List": "ArrayList"}

Description = Union[str, Tuple[str, ...], None]


class ClassType(Enum):
    """Kinds of class declared in the domain document."""

    CLASS = "CLASS"
    ABSTRACT_CLASS = "ABSTRACT_CLASS"
    ENUM = "ENUM"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ClassType":
        if not value:
            return cls.CLASS
        try:
            return cls(value)
        except ValueError:
            raise DomainError(f"Unknown classType: {value}")


@dataclass(frozen=True)
class ClassRef:
    """Reference to a parent class with its generic arguments."""

    name: str
    type_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeParam:
    """Generic parameter declared by a class, with an optional bound."""

    name: str
    bound: Optional[str] = None


@dataclass(frozen=True)
class Annotation:
    """
    Annotation attached to a class or attribute.

    ``text`` holds a literal argument rendered inside parentheses,
    ``arguments`` holds named arguments rendered as ``key = value`` pairs.
    An annotation with neither is eligible for a registered default value.
    """

    name: str
    text: Optional[str] = None
    arguments: Tuple[Tuple[str, Any], ...] = ()

    @property
    def is_bare(self) -> bool:
        return not self.text and not self.arguments


@dataclass(frozen=True)
class EnumConstant:
    name: str
    desc: Description = None


@dataclass(frozen=True)
class AttributeDef:
    """A single attribute of a (non-enum) class."""

    name: str
    type: str
    type_args: Tuple[str, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    desc: Description = None
    default: Optional[str] = None
    is_public: bool = False
    is_static: bool = False
    is_const: bool = False

    @property
    def is_container(self) -> bool:
        return self.type in CONTAINER_TYPES

    @property
    def element_type(self) -> Optional[str]:
        """Element type of a container attribute."""
        return self.type_args[0] if self.type_args else None


@dataclass(frozen=True)
class ClassDef:
    """A class, abstract class or enum declared in the domain document."""

    name: str
    namespace: Tuple[str, ...]
    class_type: ClassType = ClassType.CLASS
    attributes: Tuple[AttributeDef, ...] = ()
    constants: Tuple[EnumConstant, ...] = ()
    extends: Optional[ClassRef] = None
    implements: Tuple[str, ...] = ()
    type_params: Tuple[TypeParam, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    desc: Description = None
    dependencies: Tuple[str, ...] = ()

    @property
    def is_enum(self) -> bool:
        return self.class_type is ClassType.ENUM

    @property
    def is_abstract(self) -> bool:
        return self.class_type is ClassType.ABSTRACT_CLASS

    @property
    def package(self) -> str:
        return ".".join(self.namespace)

    @property
    def type_param_names(self) -> Tuple[str, ...]:
        return tuple(param.name for param in self.type_params)

    def attribute(self, name: str) -> Optional[AttributeDef]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


# Shape parsers


def parse_description(raw: Any) -> Description:
    if isinstance(raw, str):
        return raw or None
    if isinstance(raw, list):
        lines = tuple(str(line) for line in raw)
        return lines or None
    return None


def parse_class_ref(raw: Any) -> Optional[ClassRef]:
    """Normalize an ``extends`` spec. Lists defer to their first element."""
    if not raw:
        return None
    if isinstance(raw, str):
        return ClassRef(raw)
    if isinstance(raw, list):
        return parse_class_ref(raw[0])
    if isinstance(raw, dict):
        name, config = next(iter(raw.items()))
        injection = config.get("injection") if isinstance(config, dict) else None
        return ClassRef(name, parse_type_args(injection))
    raise DomainError(f"Unsupported extends spec: {raw!r}")


def parse_type_args(raw: Any) -> Tuple[str, ...]:
    """Normalize an attribute or extends ``injection`` into concrete type names."""
    if not raw:
        return ()
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, dict):
        return tuple(raw.keys())
    if isinstance(raw, list):
        args: List[str] = []
        for item in raw:
            args.extend(parse_type_args(item))
        return tuple(args)
    raise DomainError(f"Unsupported injection spec: {raw!r}")


def parse_type_params(raw: Any) -> Tuple[TypeParam, ...]:
    """Normalize a class ``injection`` into generic parameter declarations."""
    if not raw:
        return ()
    if isinstance(raw, str):
        return (TypeParam(raw),)
    if isinstance(raw, dict):
        params = []
        for name, config in raw.items():
            bound = config.get("extends") if isinstance(config, dict) else None
            params.append(TypeParam(name, bound or None))
        return tuple(params)
    if isinstance(raw, list):
        params = []
        for item in raw:
            params.extend(parse_type_params(item))
        return tuple(params)
    raise DomainError(f"Unsupported injection spec: {raw!r}")


def _parse_annotation(name: str, value: Any) -> Annotation:
    if isinstance(value, dict):
        arguments = tuple((k, v) for k, v in value.items() if v is not None)
        return Annotation(name, arguments=arguments)
    if value in (None, ""):
        return Annotation(name)
    return Annotation(name, text=str(value))


def parse_annotations(raw: Any) -> Tuple[Annotation, ...]:
    """Normalize an ``annotate`` spec (string, list or object)."""
    if not raw:
        return ()
    if isinstance(raw, str):
        return (Annotation(raw),)
    if isinstance(raw, dict):
        return tuple(_parse_annotation(name, value) for name, value in raw.items())
    if isinstance(raw, list):
        annotations: List[Annotation] = []
        for item in raw:
            annotations.extend(parse_annotations(item))
        return tuple(annotations)
    raise DomainError(f"Unsupported annotate spec: {raw!r}")


def parse_names(raw: Any) -> Tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(item) for item in raw)


def _format_default(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_attribute(class_name: str, name: str, raw: Any) -> Optional[AttributeDef]:
    if not raw or not isinstance(raw, dict):
        return None
    attr_type = raw.get("type")
    if not attr_type:
        logger.warning("Attribute %s.%s declares no type, skipped", class_name, name)
        return None
    return AttributeDef(
        name=name,
        type=attr_type,
        type_args=parse_type_args(raw.get("injection")),
        annotations=parse_annotations(raw.get("annotate")),
        desc=parse_description(raw.get("desc")),
        default=_format_default(raw.get("default")),
        is_public=bool(raw.get("isPublic")),
        is_static=bool(raw.get("isStatic")),
        is_const=bool(raw.get("isConst")),
    )


def parse_enum_constants(raw: Any) -> Tuple[EnumConstant, ...]:
    """Enum constants come as a list of names/objects or a name -> config map."""
    if not raw:
        return ()
    constants: List[EnumConstant] = []
    if isinstance(raw, list):
        for item in raw:
            if isinstance(item, str):
                constants.append(EnumConstant(item))
            elif isinstance(item, dict):
                constants.extend(parse_enum_constants(item))
    elif isinstance(raw, dict):
        for name, config in raw.items():
            desc = config.get("desc") if isinstance(config, dict) else None
            constants.append(EnumConstant(name, parse_description(desc)))
    return tuple(constants)


def parse_class(name: str, node: Dict[str, Any], namespace: Tuple[str, ...]) -> ClassDef:
    properties = node.get("properties") or {}
    class_type = ClassType.parse(properties.get("classType"))
    raw_attributes = node.get("attributes")

    attributes: Tuple[AttributeDef, ...] = ()
    constants: Tuple[EnumConstant, ...] = ()
    if class_type is ClassType.ENUM:
        constants = parse_enum_constants(raw_attributes)
    elif isinstance(raw_attributes, dict):
        parsed = (parse_attribute(name, k, v) for k, v in raw_attributes.items())
        attributes = tuple(attr for attr in parsed if attr is not None)
    elif raw_attributes:
        raise DomainError(f"Attributes of class '{name}' must be an object")

    return ClassDef(
        name=name,
        namespace=namespace,
        class_type=class_type,
        attributes=attributes,
        constants=constants,
        extends=parse_class_ref(properties.get("extends")),
        implements=parse_names(properties.get("implements")),
        type_params=parse_type_params(properties.get("injection")),
        annotations=parse_annotations(properties.get("annotate")),
        desc=parse_description(properties.get("desc")),
        dependencies=parse_names(properties.get("dependencies")),
    )


def iter_class_nodes(
    tree: Dict[str, Any], namespace: Tuple[str, ...]
) -> Iterator[Tuple[str, Dict[str, Any], Tuple[str, ...]]]:
    """Depth-first walk yielding (name, node, namespace) for every class node."""
    for key, node in tree.items():
        if not isinstance(node, dict):
            continue
        node_type = node.get("type")
        if not node_type:
            yield from iter_class_nodes(node, namespace + (key,))
        elif node_type == CLASS_NODE_TYPE:
            yield key, node, namespace


def parse_domain(
    tree: Dict[str, Any], root_package: str = DEFAULT_ROOT_PACKAGE
) -> List[ClassDef]:
    """
    Parse a domain tree into class definitions in depth-first order.

    Args:
        tree: Parsed domain document
        root_package: Name of the namespace the tree is rooted at

    Returns:
        List of ClassDef objects
    """
    if not isinstance(tree, dict):
        raise DomainError("Domain document must be a JSON object")
    return [
        parse_class(name, node, namespace)
        for name, node, namespace in iter_class_nodes(tree, (root_package,))
    ]
