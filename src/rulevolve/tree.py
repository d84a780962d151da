"""Expression trees composed of atom sequences and logical AND/OR nodes."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .atoms import Atom
from .enums import NodeKind


@dataclass
class Node:
    """
    Tagged expression node.

    LEAF nodes carry an ordered ``atoms`` sequence and no children. AND/OR
    nodes carry ``children`` and no atoms. Any child count is well formed,
    including zero.
    """

    kind: NodeKind
    atoms: List[Atom] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self):
        self.kind = NodeKind(self.kind)
        if self.kind == NodeKind.LEAF:
            self.children = []
        else:
            self.atoms = []

    @classmethod
    def leaf(cls, atoms: Optional[List[Atom]] = None) -> "Node":
        return cls(NodeKind.LEAF, atoms=list(atoms or []))

    @classmethod
    def all_of(cls, children: Optional[List["Node"]] = None) -> "Node":
        return cls(NodeKind.AND, children=list(children or []))

    @classmethod
    def any_of(cls, children: Optional[List["Node"]] = None) -> "Node":
        return cls(NodeKind.OR, children=list(children or []))

    @classmethod
    def branch(cls, kind: NodeKind, children: List["Node"]) -> "Node":
        if kind == NodeKind.LEAF:
            raise ValueError("branch() requires AND or OR.")
        return cls(kind, children=list(children))

    @property
    def is_leaf(self) -> bool:
        return self.kind == NodeKind.LEAF

    def copy(self) -> "Node":
        """Create deep copy."""
        clone = Node.__new__(Node)
        clone.kind = self.kind
        clone.atoms = [atom.copy() for atom in self.atoms]
        clone.children = [child.copy() for child in self.children]
        return clone

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def depth(self) -> int:
        if self.is_leaf or not self.children:
            return 1
        return 1 + max(child.depth() for child in self.children)

    def size(self) -> int:
        """Total number of nodes in the tree."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> Dict[str, Any]:
        if self.is_leaf:
            return {"leaf": [atom.to_dict() for atom in self.atoms]}
        return {self.kind.name.lower(): [child.to_dict() for child in self.children]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        if len(data) != 1:
            raise ValueError(f"Node payload must have exactly one key: {data!r}")
        (key, value), = data.items()
        if key == "leaf":
            return cls.leaf([Atom.from_dict(item) for item in value])
        if key in ("and", "or"):
            kind = NodeKind.AND if key == "and" else NodeKind.OR
            return cls.branch(kind, [cls.from_dict(item) for item in value])
        raise ValueError(f"Unknown node kind '{key}'.")

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "Node":
        return cls.from_dict(json.loads(text))

    def signature(self) -> str:
        """Stable hash of the tree structure."""
        payload = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.md5(payload.encode()).hexdigest()

    def describe(self, indent: str = "  ") -> List[str]:
        """Convert to human-readable lines, one per node."""
        lines: List[str] = []
        self._describe_into(lines, 0, indent)
        return lines

    def _describe_into(self, lines: List[str], level: int, indent: str) -> None:
        pad = indent * level
        if self.is_leaf:
            body = " ".join(atom.describe() for atom in self.atoms) or "<empty>"
            lines.append(f"{pad}SEQ [{body}]")
            return
        lines.append(f"{pad}{self.kind.name} ({len(self.children)})")
        for child in self.children:
            child._describe_into(lines, level + 1, indent)

    def __str__(self) -> str:
        if self.is_leaf:
            return "[" + " ".join(atom.describe() for atom in self.atoms) + "]"
        joiner = " & " if self.kind == NodeKind.AND else " | "
        return "(" + joiner.join(str(child) for child in self.children) + ")"


__all__ = ["Node"]
