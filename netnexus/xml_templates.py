"""Reading configuration templates from a ``<config_templates>`` XML element."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

from netnexus.template import ConfigTemplate, TemplateRegistry

logger = logging.getLogger(__name__)

_UINT32_MASK = 0xFFFFFFFF
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_uint(text: str | None) -> int:
    """Read a leading decimal integer the lenient way; 0 when there is none."""
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return int(match.group(1)) & _UINT32_MASK


def _text_content(element: ET.Element) -> str:
    return "".join(element.itertext())


def clean_template_content(content: str | None) -> str | None:
    """Strip the whitespace that the surrounding XML tags add to a template.

    One newline directly after the opening tag is dropped, and a final line
    made only of spaces and tabs (the indentation of the closing tag) is
    removed together with the newline before it. Everything else is kept.
    Returns None when nothing is left.
    """
    if not content:
        return None
    text = content[1:] if content.startswith("\n") else content
    if not text:
        return None

    end = len(text)
    pos = end - 1
    while pos > 0 and text[pos] in " \t":
        pos -= 1
    if pos > 0 and text[pos] == "\n":
        end = pos

    return text[:end] or None


def _parse_template_body(body: ET.Element, template: ConfigTemplate) -> None:
    db_attr = body.get("db")
    if db_attr is None:
        return
    db_names = [name.strip() for name in db_attr.split(",")] if db_attr else []
    cleaned = clean_template_content(_text_content(body))
    if cleaned is not None:
        template.set_body(cleaned, db_names)


def parse_config_templates(
    element: ET.Element, registry: TemplateRegistry
) -> list[ConfigTemplate]:
    """Read template definitions and bodies and register them.

    ``<template-def>`` children define templates with a name and priority;
    nested ``<template-def>`` elements name child templates, which are
    created with priority 0 unless already defined. ``<template>`` children
    supply the body of a defined template. Returns the registered templates
    in the order they were registered.
    """
    logger.info("Parsing config_templates section")
    templates: dict[str, ConfigTemplate] = {}

    for definition in element:
        if definition.tag != "template-def":
            continue
        name = definition.get("template-name")
        if name is None:
            continue
        template = ConfigTemplate(name, _to_uint(definition.get("priority")))
        for child in definition:
            if child.tag != "template-def":
                continue
            child_name = child.get("template-name")
            if child_name is None:
                continue
            template.add_child(child_name)
            if child_name not in templates:
                templates[child_name] = ConfigTemplate(child_name, 0)
        templates[name] = template

    for body in element:
        if body.tag != "template":
            continue
        name = body.get("template-name")
        if name is None:
            continue
        template = templates.get(name)
        if template is not None:
            _parse_template_body(body, template)
            logger.info("Template '%s' parsed with body", name)

    for template in templates.values():
        registry.add(template)
        logger.info(
            "Template '%s' registered (priority: %u)", template.name, template.priority
        )

    return list(templates.values())