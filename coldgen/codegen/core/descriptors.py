"""
Project descriptor rendering.

Build descriptors (``pom.xml``) are rendered from a nested key/value
structure into XML; package manifests and compiler settings are written
as indented JSON.
"""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, Mapping, Optional

from ...logging_config import get_logger
from .errors import GeneratorError

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_PLACEHOLDER = re.compile(r"^\$\{(.*)\}$")


def substitute_placeholder(value: str, variables: Optional[Mapping[str, Any]]) -> str:
    """
    Resolve a whole-value ``${name}`` placeholder from ``variables``.

    Unknown placeholders are kept verbatim.
    """
    match = _PLACEHOLDER.match(value)
    if not match:
        return value
    resolved = (variables or {}).get(match.group(1))
    if resolved is None or resolved == "":
        logger.warning("Unresolved descriptor placeholder: %s", value)
        return value
    return str(resolved)


def _scalar_text(value: Any, variables: Optional[Mapping[str, Any]]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return substitute_placeholder(value, variables)
    return str(value)


def _fill_element(
    element: ET.Element, content: Any, variables: Optional[Mapping[str, Any]]
) -> None:
    if not isinstance(content, dict):
        if content is not None:
            element.text = _scalar_text(content, variables)
        return

    for key, value in content.items():
        if key.startswith("@"):
            # "@attrs": {name: value} or "@name": value
            if isinstance(value, dict):
                for attr_name, attr_value in value.items():
                    element.set(attr_name, _scalar_text(attr_value, variables))
            elif value is not None:
                element.set(key[1:], _scalar_text(value, variables))
        elif isinstance(value, list):
            for item in value:
                _fill_element(ET.SubElement(element, key), item, variables)
        else:
            _fill_element(ET.SubElement(element, key), value, variables)


def build_xml(
    structure: Dict[str, Any],
    variables: Optional[Mapping[str, Any]] = None,
    indent: str = "  ",
) -> str:
    """
    Render a nested mapping as a pretty-printed XML document.

    Keys prefixed with ``@`` become attributes, scalar values become text
    nodes, lists become repeated sibling elements and ``${name}`` values are
    substituted from ``variables``.

    Args:
        structure: Mapping with a single root element key
        variables: Values for ``${name}`` placeholders
        indent: Indentation unit

    Returns:
        XML document including the declaration line

    Raises:
        GeneratorError: If the structure does not have exactly one root
    """
    if not isinstance(structure, dict) or len(structure) != 1:
        raise GeneratorError("XML descriptor must have exactly one root element")

    root_name, content = next(iter(structure.items()))
    root = ET.Element(root_name)
    _fill_element(root, content, variables)
    ET.indent(root, space=indent)
    return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}\n"


def build_json(document: Any, indentation: int = 4) -> str:
    """Render a JSON descriptor with a trailing newline."""
    return json.dumps(document, indent=indentation, ensure_ascii=False) + "\n"
