"""CLI view hierarchy."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class View:
    """A CLI view with its command tree and child views."""

    view_id: int
    view_name: str = ""
    prompt_template: str = ""
    cmd_tree: Any = None
    parent: View | None = field(default=None, repr=False)
    children: list[View] = field(default_factory=list, repr=False)

    def add_child(self, child: View) -> None:
        """Attach a child view and set its parent."""
        self.children.append(child)
        child.parent = self

    def find_by_id(self, view_id: int) -> View | None:
        """Depth-first search of this view and its descendants."""
        return next((v for v in self.walk() if v.view_id == view_id), None)

    def walk(self) -> Iterator[View]:
        """Yield this view and every descendant, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class ViewTree:
    """The root view and the view holding global commands."""

    root: View | None = None
    global_view: View | None = None


def prompt_template(root: View | None, view_id: int) -> str:
    """Return the prompt template of a view; KeyError if there is none."""
    if root is None:
        raise KeyError(view_id)
    view = root.find_by_id(view_id)
    if view is None:
        raise KeyError(view_id)
    return view.prompt_template