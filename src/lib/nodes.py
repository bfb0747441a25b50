"""
UI node tree

Lightweight stand-in for DOM elements. Completion options build trees of
UINode; the editor (or the CLI report) serializes them to HTML.
"""

import html
from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field

# Tag whose serialization is only its children (like a DocumentFragment)
FRAGMENT = "fragment"


@dataclass
class UINode:
    """
    One element of a rendered view

    Attributes:
        tag: Element tag name (e.g., "li", "span"), or "fragment"
        classes: CSS classes in order
        text: Text content, rendered before the children and always escaped
        attrs: Extra attributes (e.g., {"data-name": "roll"})
        children: Child nodes (or plain strings, rendered as escaped text)

    Example:
        UINode("span", ["name"], "roll").html()
        -> '<span class="name">roll</span>'
    """
    tag: str
    classes: List[str] = field(default_factory=list)
    text: str = ""
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List[Union["UINode", str]] = field(default_factory=list)

    def append(self, *children: Union["UINode", str, None]) -> "UINode":
        """Append children, skipping None; returns self for chaining"""
        self.children.extend(child for child in children if child is not None)
        return self

    def class_add(self, *classes: str) -> "UINode":
        """Add CSS classes that are not already present"""
        for css_class in classes:
            if css_class not in self.classes:
                self.classes.append(css_class)
        return self

    def text_get(self) -> str:
        """Concatenated text content of this node and its descendants"""
        parts = [self.text]
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text_get())
        return "".join(parts)

    def find(self, css_class: str) -> Optional["UINode"]:
        """First node in the tree (depth-first, self included) carrying css_class"""
        if css_class in self.classes:
            return self
        for child in self.children:
            if isinstance(child, UINode):
                found = child.find(css_class)
                if found is not None:
                    return found
        return None

    def html(self) -> str:
        """Serialize the tree to HTML"""
        inner = html.escape(self.text, quote=False) + "".join(
            html.escape(child, quote=False) if isinstance(child, str) else child.html()
            for child in self.children
        )
        if self.tag == FRAGMENT:
            return inner

        attributes = ""
        if self.classes:
            attributes += f' class="{html.escape(" ".join(self.classes))}"'
        for name, value in self.attrs.items():
            attributes += f' {name}="{html.escape(value)}"'
        return f"<{self.tag}{attributes}>{inner}</{self.tag}>"


def node(tag: str, *classes: str, text: str = "", **attrs: str) -> UINode:
    """
    Shorthand constructor

    Attribute names use underscores for dashes (data_name -> data-name).

    Example:
        node("span", "type", "monospace", text="{}")
    """
    return UINode(
        tag=tag,
        classes=list(classes),
        text=text,
        attrs={name.replace("_", "-"): value for name, value in attrs.items()},
    )


def fragment(*children: Union[UINode, str, None]) -> UINode:
    """Group nodes without a wrapping element"""
    return UINode(FRAGMENT).append(*children)


def icon(*classes: str, title: str = "") -> UINode:
    """Font icon element (<i class="fa-solid ...">)"""
    element = node("i", *classes)
    if title:
        element.attrs["title"] = title
    return element
