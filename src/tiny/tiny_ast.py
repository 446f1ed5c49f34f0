"""
Defines the abstract syntax tree (AST) node structure for the tiny language.

Classes:
    Node:
        A binary tree node tagged with a NodeKind. Produced by the parser and
        consumed by the AST printer.

    NodeDict:
        TypedDict representation for serializing Node instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Each Node tracks:
    kind (NodeKind): The variant tag (e.g. Assign, If, Add).
    left (Node, optional): First child.
    right (Node, optional): Second child.
    value (str, optional): Payload. Only Identifier, Integer and String leaves have one.

Shape conventions:
    - Sequence nodes chain left-deep: Sequence(Sequence(None, s1), s2).
    - If nodes keep three parts in a binary tree: If(condition, If(then, else)).
    - Single-operand nodes (Negate, Not, Prtc, Prts, Prti) use `left` only.

Example:
    node = make_node(NodeKind.Assign, make_leaf(NodeKind.Identifier, "x"),
                     make_leaf(NodeKind.Integer, "42"))
"""

from typing import Any, Optional, TypedDict

from tiny.tiny_constants import LEAF_KINDS, NodeKind


class NodeDict(TypedDict):
    """TypedDict representation of a Node used for serialization.

    Fields:
        kind (str): Printed name of the node kind.
        value (str | None): Leaf payload.
        left (NodeDict | None): Serialized left child.
        right (NodeDict | None): Serialized right child.
    """

    kind: str
    value: str | None
    left: Optional["NodeDict"]
    right: Optional["NodeDict"]


class Node:
    """
    Represents a node in the abstract syntax tree (AST) for the tiny language.

    Args:
        kind (NodeKind): The variant tag.
        left (Node, optional): First child.
        right (Node, optional): Second child.
        value (str, optional): Leaf payload.

    Methods:
        is_leaf(): True for the payload-carrying kinds.
        __repr__(): Nested, constructor-like string for debugging.
        __eq__(other): Structural equality.
        to_dict(): Converts the node and its descendants to nested dictionaries.
    """

    __slots__ = ("kind", "left", "right", "value")

    def __init__(
        self,
        kind: NodeKind,
        left: Optional["Node"] = None,
        right: Optional["Node"] = None,
        value: str | None = None,
    ):
        self.kind = kind
        self.left = left
        self.right = right
        self.value = value

    def is_leaf(self) -> bool:
        return self.kind in LEAF_KINDS

    # The methods below walk with an explicit stack: a program of N statements is
    # a left-deep Sequence chain N levels deep.

    def __repr__(self) -> str:
        parts: list[str] = []
        stack: list[Node | str | None] = [self]
        while stack:
            item = stack.pop()
            if item is None or isinstance(item, str):
                parts.append(str(item))
            elif item.is_leaf():
                parts.append(f"{item.kind}({item.value!r})")
            else:
                parts.append(f"{item.kind}(")
                stack.append(")")
                if item.right is not None:
                    stack.extend([item.right, ", "])
                stack.append(item.left)
        return "".join(parts)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Node):
            return False
        stack: list[tuple[Node | None, Node | None]] = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is None or b is None:
                if a is not b:
                    return False
                continue
            if a.kind != b.kind or a.value != b.value:
                return False
            stack.append((a.right, b.right))
            stack.append((a.left, b.left))
        return True

    def _shallow_dict(self) -> NodeDict:
        return {"kind": str(self.kind), "value": self.value, "left": None, "right": None}

    def to_dict(self) -> NodeDict:
        root = self._shallow_dict()
        stack: list[tuple[Node, NodeDict]] = [(self, root)]
        while stack:
            node, d = stack.pop()
            for side, child in (("left", node.left), ("right", node.right)):
                if child is not None:
                    child_dict = child._shallow_dict()
                    d[side] = child_dict  # type: ignore[literal-required]
                    stack.append((child, child_dict))
        return root


def make_node(
    kind: NodeKind, left: Node | None = None, right: Node | None = None
) -> Node:
    """Builds an interior node.

    Raises:
        ValueError: If `kind` is a leaf kind.
    """
    if kind in LEAF_KINDS:
        raise ValueError(f"{kind} is a leaf kind; use make_leaf()")
    return Node(kind, left, right)


def make_leaf(kind: NodeKind, value: str) -> Node:
    """Builds an Identifier, Integer or String leaf.

    Raises:
        ValueError: If `kind` is not a leaf kind.
    """
    if kind not in LEAF_KINDS:
        raise ValueError(f"{kind} is not a leaf kind; use make_node()")
    return Node(kind, value=value)


__all__ = ["Node", "NodeDict", "make_leaf", "make_node"]
