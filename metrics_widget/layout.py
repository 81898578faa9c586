"""Serialisable layout tree shared by the widget and dashboard renderers."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

StyleValue = Union[str, int, float, bool]


class LayoutNode(BaseModel):
    """One node of a rendered surface."""
    kind: str = Field(description="widget, screen, section, stack, row, card, text, icon, badge, divider, spacer or link")
    field: Optional[str] = Field(default=None, description="Data field this node displays")
    text: Optional[str] = None
    style: dict[str, StyleValue] = Field(default_factory=dict)
    children: list[LayoutNode] = Field(default_factory=list)

    def shown_fields(self) -> set[str]:
        """Every data field shown anywhere in this subtree."""
        found = {self.field} if self.field else set()
        for child in self.children:
            found |= child.shown_fields()
        return found

    def find(self, field: str) -> Optional[LayoutNode]:
        """First node (depth-first) that displays `field`."""
        if self.field == field:
            return self
        for child in self.children:
            match = child.find(field)
            if match is not None:
                return match
        return None

    def find_all(self, kind: str) -> list[LayoutNode]:
        """All nodes of a kind, depth-first."""
        found = [self] if self.kind == kind else []
        for child in self.children:
            found.extend(child.find_all(kind))
        return found


def text(value: str, field: Optional[str] = None, **style: StyleValue) -> LayoutNode:
    return LayoutNode(kind="text", field=field, text=value, style=style)


def icon(name: str, field: Optional[str] = None, **style: StyleValue) -> LayoutNode:
    return LayoutNode(kind="icon", field=field, text=name, style=style)


def stack(*children: LayoutNode, **style: StyleValue) -> LayoutNode:
    return LayoutNode(kind="stack", children=list(children), style=style)


def row(*children: LayoutNode, **style: StyleValue) -> LayoutNode:
    return LayoutNode(kind="row", children=list(children), style=style)


def card(*children: LayoutNode, **style: StyleValue) -> LayoutNode:
    return LayoutNode(kind="card", children=list(children), style=style)


def spacer() -> LayoutNode:
    return LayoutNode(kind="spacer")


def divider(color: str = "#E5E7EB") -> LayoutNode:
    return LayoutNode(kind="divider", style={"color": color})
