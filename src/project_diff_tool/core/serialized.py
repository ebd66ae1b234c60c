"""
Ordered tree container for delta payloads.

A SerializedData node has a type tag, ordered scalar attributes and
ordered child nodes. A node without a type tag is invalid and stands
for "no data".
"""

import copy
from typing import Any, Iterator, Optional

# Attribute values allowed in a tree
Scalar = (str, int, float, bool, type(None))


class SerializedData:
    """A named tree node with attributes and children."""

    def __init__(
        self,
        type_tag: Optional[str] = None,
        attributes: Optional[dict[str, Any]] = None,
        children: Optional[list["SerializedData"]] = None,
    ):
        self._type = type_tag or ""
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._children: list[SerializedData] = list(children or [])

    @property
    def type(self) -> str:
        return self._type

    @property
    def attributes(self) -> dict[str, Any]:
        return self._attributes

    @property
    def children(self) -> list["SerializedData"]:
        return self._children

    def is_valid(self) -> bool:
        return bool(self._type)

    def has_type(self, type_tag: str) -> bool:
        return self._type == type_tag

    def get_num_children(self) -> int:
        return len(self._children)

    def append_child(self, child: "SerializedData") -> None:
        self._children.append(child)

    def get_child_with_name(self, type_tag: str) -> "SerializedData":
        """Get the first child with the given type, or an invalid node."""
        for child in self._children:
            if child.has_type(type_tag):
                return child
        return SerializedData()

    def iter_children_with_type(self, type_tag: str) -> Iterator["SerializedData"]:
        for child in self._children:
            if child.has_type(type_tag):
                yield child

    def get_property(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def set_property(self, name: str, value: Any) -> None:
        if not isinstance(value, Scalar):
            raise TypeError(
                f"Attribute {name!r} must be a scalar, got {type(value).__name__}"
            )
        self._attributes[name] = value

    def has_property(self, name: str) -> bool:
        return name in self._attributes

    def is_empty(self) -> bool:
        """True when the node carries neither attributes nor children."""
        return not self._attributes and not self._children

    def create_copy(self) -> "SerializedData":
        """Deep copy; the result never aliases this tree."""
        return copy.deepcopy(self)

    def is_equivalent_to(self, other: "SerializedData") -> bool:
        """
        Compare two trees structurally.

        Attribute order is ignored, child order is not.
        """
        if self._type != other._type:
            return False
        if self._attributes != other._attributes:
            return False
        if len(self._children) != len(other._children):
            return False
        return all(
            mine.is_equivalent_to(theirs)
            for mine, theirs in zip(self._children, other._children)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SerializedData):
            return NotImplemented
        return (
            self._type == other._type
            and list(self._attributes.items()) == list(other._attributes.items())
            and self._children == other._children
        )

    def __deepcopy__(self, memo: dict) -> "SerializedData":
        return SerializedData(
            self._type,
            dict(self._attributes),
            [copy.deepcopy(child, memo) for child in self._children],
        )

    # === Plain-data conversion (used by the YAML loader/writer) ===

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self._type,
            "attributes": dict(self._attributes),
            "children": [child.to_dict() for child in self._children],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SerializedData":
        """Build a tree from plain data; anything malformed is an invalid node."""
        if not isinstance(data, dict) or not data.get("type"):
            return cls()

        attributes = data.get("attributes") or {}
        if not isinstance(attributes, dict):
            attributes = {}

        children = data.get("children") or []
        if not isinstance(children, list):
            children = []

        return cls(
            str(data["type"]),
            {
                str(k): v for k, v in attributes.items()
                if isinstance(v, Scalar)
            },
            [cls.from_dict(child) for child in children if isinstance(child, dict)],
        )

    def __repr__(self) -> str:
        if not self.is_valid():
            return "SerializedData(<invalid>)"
        return (
            f"SerializedData({self._type!r}, attrs={len(self._attributes)}, "
            f"children={len(self._children)})"
        )
