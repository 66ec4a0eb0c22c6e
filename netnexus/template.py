"""Configuration templates: definitions, a registry and variable rendering."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TemplateBody:
    """Template text with ``{table.field}`` variables and the databases it reads."""

    content: str | None = None
    db_names: list[str] = field(default_factory=list)


@dataclass
class ConfigTemplate:
    """A named configuration template with a priority and child templates."""

    name: str
    priority: int = 0
    child_names: list[str] = field(default_factory=list)
    body: TemplateBody | None = None

    def add_child(self, child_name: str) -> None:
        """Append the name of a child template."""
        self.child_names.append(child_name)

    def set_body(self, content: str | None, db_names=()) -> None:
        """Replace the template body with new content and database names."""
        self.body = TemplateBody(content=content, db_names=list(db_names))

    def render(self, var_values: dict[str, str] | None) -> str:
        """Substitute known variables and convert line ends to CRLF.

        Without a body the result is empty. Without a value mapping the
        content is returned as it stands.
        """
        if self.body is None or not self.body.content:
            return ""
        text = self.body.content
        if var_values is None:
            return text
        for var_name in parse_template_variables(self.body.content):
            value = var_values.get(var_name)
            if value is not None:
                text = text.replace("{" + var_name + "}", value)
        return text.replace("\n", "\r\n")


def parse_template_variables(content: str | None) -> list[str]:
    """Return the names inside ``{...}`` pairs, in order of appearance."""
    names: list[str] = []
    if not content:
        return names
    pos = content.find("{")
    while pos != -1:
        end = content.find("}", pos)
        if end == -1:
            pos = content.find("{", pos + 1)
            continue
        names.append(content[pos + 1:end])
        pos = content.find("{", end + 1)
    return names


class TemplateRegistry:
    """Templates keyed by name; a later template replaces one of the same name."""

    def __init__(self) -> None:
        self._templates: dict[str, ConfigTemplate] = {}

    def add(self, template: ConfigTemplate) -> None:
        """Register a template under its name."""
        if not template.name:
            return
        self._templates.pop(template.name, None)
        self._templates[template.name] = template

    def find(self, name: str) -> ConfigTemplate | None:
        """Return the template with this name, or None."""
        return self._templates.get(name)

    def all(self) -> list[ConfigTemplate]:
        """Return every template, highest priority first."""
        return sorted(self._templates.values(), key=lambda t: -t.priority)

    def clear(self) -> None:
        """Remove every template."""
        self._templates.clear()

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates