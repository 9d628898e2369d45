"""Node model for parsed markup trees.

A tree is made of two node variants: ``Element`` (tag name, attributes and
ordered children) and ``Text`` (a trimmed run of content). Nodes are built
bottom-up during a single parse and are owned by exactly one parent; there are
no parent back-references. The helpers below only read the tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass
class Text:
    """A contiguous run of non-tag content."""

    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert text node to dictionary representation."""
        return {"type": "text", "content": self.content}


@dataclass
class Element:
    """A markup element with its attributes and ordered children."""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.tag_name:
            raise ValueError("Element tag name cannot be empty")

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    @property
    def element_children(self) -> List["Element"]:
        return [child for child in self.children if isinstance(child, Element)]

    @property
    def text_children(self) -> List[Text]:
        return [child for child in self.children if isinstance(child, Text)]

    def iter_elements(self) -> Iterator["Element"]:
        """Iterate over this element and all descendant elements in document order."""
        stack: List[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.element_children))

    def find(self, tag_name: str) -> Optional["Element"]:
        """Find first descendant element (excluding self) with matching tag name."""
        return next(
            (
                element for element in self.iter_elements()
                if element is not self and element.tag_name == tag_name
            ),
            None
        )

    def find_all(self, tag_name: str) -> List["Element"]:
        """Find all descendant elements (excluding self) with matching tag name."""
        return [
            element for element in self.iter_elements()
            if element is not self and element.tag_name == tag_name
        ]

    def text_content(self, separator: str = " ") -> str:
        """Join all descendant text runs in document order."""
        parts: List[str] = []
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                if node.content:
                    parts.append(node.content)
            else:
                stack.extend(reversed(node.children))
        return separator.join(parts)

    @property
    def max_depth(self) -> int:
        """Number of nested elements on the deepest path (a leaf element is 1)."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            element, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in element.element_children)
        return deepest

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        return {
            "type": "element",
            "tag_name": self.tag_name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }


Node = Union[Element, Text]
