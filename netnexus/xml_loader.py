"""Loading a module's XML definition: views, database definitions and templates."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from netnexus.template import ConfigTemplate, TemplateRegistry
from netnexus.view import View, ViewTree
from netnexus.xml_templates import parse_config_templates

logger = logging.getLogger(__name__)

CONFIG_VIEW_ID = 1
"""Id of the configuration view under which views of later modules are attached."""

_UINT32_MASK = 0xFFFFFFFF
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XmlLoadError(Exception):
    """Raised when a module XML file cannot be read or lacks its module id."""


@dataclass
class XmlField:
    """A field as declared in XML: its name and type string."""

    field_name: str
    type_str: str


@dataclass
class XmlTable:
    """A table as declared in XML, with its fields in order."""

    table_name: str
    fields: list[XmlField] = field(default_factory=list)


@dataclass
class XmlDatabase:
    """A database as declared in XML, owned by a module."""

    db_name: str
    module_id: int = 0
    tables: list[XmlTable] = field(default_factory=list)


@dataclass
class ModuleXml:
    """What one module XML file contributed."""

    module_id: int
    view_tree: ViewTree
    databases: list[XmlDatabase] = field(default_factory=list)
    templates: list[ConfigTemplate] = field(default_factory=list)


def _atoi(text: str | None) -> int:
    """Read a leading decimal integer leniently, as an unsigned 32-bit value."""
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return int(match.group(1)) & _UINT32_MASK


def _text_content(element: ET.Element) -> str:
    return "".join(element.itertext())


def _children(element: ET.Element, tag: str):
    return (child for child in element if child.tag == tag)


def parse_view(element: ET.Element) -> View | None:
    """Build a view and its child views from a ``<view>`` element.

    Returns None when the element has no ``view-id`` attribute. The prompt
    template is the text of the first ``<template>`` child, if any.
    """
    view_id_attr = element.get("view-id")
    if view_id_attr is None:
        return None

    template_element = next(_children(element, "template"), None)
    prompt = _text_content(template_element) if template_element is not None else ""

    view = View(
        view_id=_atoi(view_id_attr),
        view_name=element.get("view-name", ""),
        prompt_template=prompt,
    )
    for child_element in _children(element, "view"):
        child = parse_view(child_element)
        if child is not None:
            view.add_child(child)
    return view


def _parse_field(element: ET.Element) -> XmlField | None:
    name = element.get("field-name")
    type_str = element.get("type")
    if name is None or type_str is None:
        return None
    return XmlField(name, type_str)


def _parse_table(element: ET.Element) -> XmlTable | None:
    name = element.get("table-name")
    if name is None:
        return None
    table = XmlTable(name)
    for fields_element in _children(element, "fields"):
        for field_element in _children(fields_element, "field"):
            parsed = _parse_field(field_element)
            if parsed is not None:
                table.fields.append(parsed)
    return table


def parse_databases(element: ET.Element, module_id: int) -> XmlDatabase | None:
    """Read the first named ``<db>`` of a ``<dbs>`` element; None if there is none."""
    for db_element in _children(element, "db"):
        db_name = db_element.get("db-name")
        if db_name is None:
            continue
        database = XmlDatabase(db_name, module_id)
        for tables_element in _children(db_element, "tables"):
            for table_element in _children(tables_element, "table"):
                table = _parse_table(table_element)
                if table is not None:
                    database.tables.append(table)
        return database
    return None


def _attach_view(view_tree: ViewTree, view: View) -> None:
    if view_tree.root is None:
        view_tree.root = view
        return
    if view_tree.root.find_by_id(view.view_id) is not None:
        logger.error("view %u exist", view.view_id)
        return
    parent = view_tree.root.find_by_id(CONFIG_VIEW_ID)
    if parent is None:
        logger.error("config view does not exist")
        return
    parent.add_child(view)


def load_module_xml(
    path: str | Path,
    view_tree: ViewTree | None = None,
    template_registry: TemplateRegistry | None = None,
) -> ModuleXml:
    """Load a module XML file into a view tree and a template registry.

    The first view loaded becomes the root; later top-level views are added
    under the configuration view unless a view with the same id exists.
    Database definitions are collected and templates registered.
    """
    tree = view_tree if view_tree is not None else ViewTree()
    registry = template_registry if template_registry is not None else TemplateRegistry()

    try:
        document = ET.parse(str(path))
    except (ET.ParseError, OSError) as exc:
        raise XmlLoadError(f"Could not parse file {path}: {exc}") from exc

    root = document.getroot()
    module_id_attr = root.get("module-id")
    if module_id_attr is None:
        raise XmlLoadError(f"parse module_id fail in {path}")

    module_id = _atoi(module_id_attr)
    logger.info("Loading XML for module: %u", module_id)
    result = ModuleXml(module_id=module_id, view_tree=tree)

    for views_element in _children(root, "views"):
        for view_element in _children(views_element, "view"):
            view = parse_view(view_element)
            if view is not None:
                _attach_view(tree, view)

    for dbs_element in _children(root, "dbs"):
        database = parse_databases(dbs_element, module_id)
        if database is not None:
            result.databases.append(database)

    for templates_element in _children(root, "config_templates"):
        result.templates.extend(parse_config_templates(templates_element, registry))

    return result