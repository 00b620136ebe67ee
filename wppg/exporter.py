"""Configuration export to YAML, JSON and XML files.

``ConfigExporter`` resolves the requested formats once, at construction, from
a fixed registry of encoders and fails immediately on an unknown name.
:meth:`ConfigExporter.export` then writes one ``<base_path>.<format>`` file
per format.  Formats are independent: a failed write is reported and the
remaining formats are still attempted, but the overall result is ``False``.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from wppg.errors import UnsupportedFormatError
from wppg.utils import print_success, print_warning, write_file

Encoder = Callable[[Any, Mapping[str, Any]], str]


# ---------------------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------------------


def encode_yaml(data: Any, options: Mapping[str, Any]) -> str:
    """Dump *data* as YAML.

    Mappings and sequences nested deeper than ``options["inline"]`` levels
    are written in flow style; shallower ones use block style with
    ``options["indent"]`` spaces.
    """
    representer = _PlainRepresenter(default_flow_style=False, sort_keys=False)
    node = representer.represent_data(data)
    _set_flow_style(node, options.get("inline", 2), depth=0)
    return yaml.serialize(
        node,
        Dumper=yaml.SafeDumper,
        indent=options.get("indent", 2),
        allow_unicode=True,
    )


class _PlainRepresenter(yaml.representer.SafeRepresenter):
    """Safe representer that never emits anchors and aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _set_flow_style(node: yaml.Node, inline: int, depth: int) -> None:
    if isinstance(node, yaml.MappingNode):
        node.flow_style = depth >= inline
        for key_node, value_node in node.value:
            _set_flow_style(value_node, inline, depth + 1)
    elif isinstance(node, yaml.SequenceNode):
        node.flow_style = depth >= inline
        for item in node.value:
            _set_flow_style(item, inline, depth + 1)


def encode_json(data: Any, options: Mapping[str, Any]) -> str:
    """Dump *data* as pretty-printed JSON."""
    return json.dumps(
        data,
        indent=options.get("indent", 2),
        ensure_ascii=False,
        default=str,
    )


def encode_xml(data: Any, options: Mapping[str, Any]) -> str:
    """Dump *data* as an XML document.

    Mapping keys become elements, list items repeat their parent's tag, keys
    that are not valid XML names become ``<item key="...">`` elements.
    """
    root = ET.Element(options.get("root_name", "response"))
    _fill_xml(root, data)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0"?>\n{body}\n'


def _fill_xml(element: ET.Element, value: Any) -> None:
    if isinstance(value, Mapping):
        for key, child in value.items():
            _append_xml(element, str(key), child)
    elif isinstance(value, (list, tuple)):
        for index, child in enumerate(value):
            _append_xml(element, str(index), child)
    elif isinstance(value, bool):
        element.text = "1" if value else "0"
    elif value is not None:
        element.text = str(value)


def _append_xml(parent: ET.Element, key: str, value: Any) -> None:
    if isinstance(value, (list, tuple)) and _is_xml_name(key):
        # A list under a named key repeats that key once per item.
        for item in value:
            _fill_xml(ET.SubElement(parent, key), item)
        return
    if _is_xml_name(key):
        child = ET.SubElement(parent, key)
    else:
        child = ET.SubElement(parent, "item", {"key": key})
    _fill_xml(child, value)


def _is_xml_name(name: str) -> bool:
    if not name or name.lower().startswith("xml"):
        return False
    if not (name[0].isalpha() or name[0] == "_"):
        return False
    return all(c.isalnum() or c in "_-." for c in name)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EncoderDescriptor:
    """A registered format: its file extension, encoder and encoder options."""

    format: str
    encoder: Encoder
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def extension(self) -> str:
        return self.format

    def encode(self, data: Any) -> str:
        return self.encoder(data, self.options)


_YAML_OPTIONS: Mapping[str, Any] = {"inline": 2, "indent": 2}

SUPPORTED_ENCODERS: dict[str, EncoderDescriptor] = {
    "yaml": EncoderDescriptor("yaml", encode_yaml, _YAML_OPTIONS),
    "yml": EncoderDescriptor("yml", encode_yaml, _YAML_OPTIONS),
    "json": EncoderDescriptor("json", encode_json),
    "xml": EncoderDescriptor("xml", encode_xml),
}


def parse_formats(formats: str) -> list[str]:
    """Normalise and deduplicate a comma-separated list of format names.

    Raises:
        UnsupportedFormatError: A name is not in ``SUPPORTED_ENCODERS``.
    """
    requested: list[str] = []
    for raw in formats.split(","):
        key = raw.strip().lower()
        if key not in SUPPORTED_ENCODERS:
            raise UnsupportedFormatError(key, sorted(SUPPORTED_ENCODERS))
        if key not in requested:
            requested.append(key)
    return requested


# ---------------------------------------------------------------------------
# ConfigExporter
# ---------------------------------------------------------------------------


class ConfigExporter:
    """Serialises one document to one or more formats.

    Attributes:
        encoders: Resolved encoders, in request order.
        written: Files successfully written by the last :meth:`export`.
    """

    def __init__(self, formats: str = "yaml") -> None:
        self.encoders: list[EncoderDescriptor] = [
            SUPPORTED_ENCODERS[key] for key in parse_formats(formats)
        ]
        self.written: list[Path] = []

    @property
    def formats(self) -> list[str]:
        return [descriptor.format for descriptor in self.encoders]

    def export(self, document: Mapping[str, Any], base_path: str | Path) -> bool:
        """Write *document* once per resolved format.

        Args:
            document: The fully assembled export document.
            base_path: Path without extension; ``.<format>`` is appended.

        Returns:
            ``True`` if every attempted write succeeded.
        """
        self.written = []
        result = True
        for descriptor in self.encoders:
            content = descriptor.encode(document)
            if not content:
                continue

            target = Path(f"{base_path}.{descriptor.extension}")
            try:
                write_file(target, content)
            except OSError as exc:
                print_warning(f"Could not write {target}: {exc}")
                result = False
                continue

            self.written.append(target)
            print_success(f"  Configuration exported to {target}")

        return result
