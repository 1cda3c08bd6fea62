"""Scenes: hierarchies of scene objects that carry components."""

from __future__ import annotations

from enum import Enum, Flag, auto
from typing import Iterator, Union

from sgraph.component import Component, ComponentList, ComponentMessage, ComponentMessageParams

__all__ = ["EnumDirection", "EnumCallOrder", "SceneNode", "SceneObject", "Scene"]

ComponentType = Union[str, type]


class EnumDirection(Enum):
    """Order in which siblings are visited."""

    FIRST_TO_LAST = auto()
    LAST_TO_FIRST = auto()


class EnumCallOrder(Flag):
    """Whether a node is reported before its children, after them, or both."""

    PRE_ORDER = auto()
    POST_ORDER = auto()


class SceneNode:
    """A node of the scene hierarchy holding its components."""

    __slots__ = ("scene", "parent", "children", "components")

    def __init__(self, scene: "Scene | None", parent: "SceneNode | None" = None) -> None:
        self.scene = scene
        self.parent = parent
        self.children: list[SceneNode] = []
        self.components = ComponentList()

    def index_in_parent(self) -> int:
        assert self.parent is not None
        return next(i for i, node in enumerate(self.parent.children) if node is self)

    def detach(self) -> None:
        if self.parent is not None:
            self.parent.children.pop(self.index_in_parent())
            self.parent = None

    def discard(self) -> None:
        """Drop the node's components and its whole subtree."""
        self.components.clear()
        for child in self.children:
            child.parent = None
            child.discard()
        self.children.clear()

    def walk(
        self, direction: EnumDirection, call_order: EnumCallOrder
    ) -> Iterator[tuple["SceneNode", EnumCallOrder]]:
        children = list(self.children)
        if direction is EnumDirection.LAST_TO_FIRST:
            children.reverse()
        for child in children:
            if EnumCallOrder.PRE_ORDER in call_order:
                yield child, EnumCallOrder.PRE_ORDER
            yield from child.walk(direction, call_order)
            if EnumCallOrder.POST_ORDER in call_order:
                yield child, EnumCallOrder.POST_ORDER


def _type_name(component_type: ComponentType) -> str:
    if isinstance(component_type, str):
        return component_type
    return component_type.type_name()


class SceneObject:
    """Handle to a scene node; a handle without a node is false and does nothing."""

    __slots__ = ("_node",)

    def __init__(self, node: SceneNode | None = None) -> None:
        self._node = node

    @property
    def node(self) -> SceneNode | None:
        return self._node

    def __bool__(self) -> bool:
        return self._node is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SceneObject):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"SceneObject({'null' if self._node is None else hex(id(self._node))})"

    def scene(self) -> "Scene | None":
        return self._node.scene if self._node else None

    # Navigation

    def parent(self) -> "SceneObject":
        return SceneObject(self._node.parent if self._node else None)

    def first_child(self) -> "SceneObject":
        return SceneObject(self._node.children[0] if self._node and self._node.children else None)

    def last_child(self) -> "SceneObject":
        return SceneObject(self._node.children[-1] if self._node and self._node.children else None)

    def child_at(self, pos: int) -> "SceneObject":
        """Child at ``pos``, or a null object when there is none."""
        if self._node and 0 <= pos < len(self._node.children):
            return SceneObject(self._node.children[pos])
        return SceneObject()

    def _sibling(self, step: int) -> "SceneObject":
        if not self._node or self._node.parent is None:
            return SceneObject()
        siblings = self._node.parent.children
        index = self._node.index_in_parent() + step
        return SceneObject(siblings[index] if 0 <= index < len(siblings) else None)

    def next_sibling(self) -> "SceneObject":
        return self._sibling(1)

    def prev_sibling(self) -> "SceneObject":
        return self._sibling(-1)

    # Structure

    def _insert_child(self, pos: int) -> "SceneObject":
        assert self._node is not None
        child = SceneNode(self._node.scene, self._node)
        self._node.children.insert(pos, child)
        return SceneObject(child)

    def append_child(self) -> "SceneObject":
        if not self._node:
            return SceneObject()
        return self._insert_child(len(self._node.children))

    def prepend_child(self) -> "SceneObject":
        if not self._node:
            return SceneObject()
        return self._insert_child(0)

    def insert_child_at(self, pos: int) -> "SceneObject":
        """Insert a new child so that it ends up at ``pos``."""
        if not self._node:
            return SceneObject()
        if not 0 <= pos <= len(self._node.children):
            raise IndexError(f"child position {pos} out of range")
        return self._insert_child(pos)

    def _insert_sibling(self, step: int) -> "SceneObject":
        if not self._node or self._node.parent is None:
            return SceneObject()
        return SceneObject(self._node.parent).insert_child_at(self._node.index_in_parent() + step)

    def insert_after(self) -> "SceneObject":
        """Insert a new sibling after this object; null for an object without a parent."""
        return self._insert_sibling(1)

    def insert_before(self) -> "SceneObject":
        """Insert a new sibling before this object; null for an object without a parent."""
        return self._insert_sibling(0)

    def remove_child_at(self, pos: int) -> None:
        if not self._node:
            return
        if not 0 <= pos < len(self._node.children):
            raise IndexError(f"child position {pos} out of range")
        child = self._node.children.pop(pos)
        child.parent = None
        child.discard()

    def remove_children(self) -> None:
        if self._node:
            self._node.discard()

    def remove_from_parent(self) -> None:
        """Remove this object and its subtree; the handle becomes null."""
        if not self._node:
            return
        if self._node.parent is not None:
            self._node.detach()
            self._node.discard()
        self._node = None

    # Components

    def add_component(self, component: Component | type[Component]) -> Component:
        """Add a component (or a new one of the given class) and send it the added message."""
        if self._node is None:
            raise ValueError("cannot add a component to a null scene object")
        if component is None:
            raise ValueError("component is missing")
        if isinstance(component, type):
            component = component()
        if component.scene is None:
            component.scene = self._node.scene
        self._node.components.append(component)
        component.send_message(ComponentMessage.ADDED, ComponentMessageParams(SceneObject(self._node)))
        return component

    def components(self, component_type: ComponentType) -> Iterator[Component]:
        """Components of this object having the given type."""
        if not self._node:
            return
        name = _type_name(component_type)
        for component in self._node.components:
            if component.type_name() == name:
                yield component

    def components_in_parent(self, component_type: ComponentType) -> Iterator[tuple["SceneObject", Component]]:
        """Pairs of ancestor and its component of the given type, nearest ancestor first."""
        for ancestor in self.ancestors():
            for component in ancestor.components(component_type):
                yield ancestor, component

    def components_in_children(self, component_type: ComponentType) -> Iterator[tuple["SceneObject", Component]]:
        """Pairs of descendant and its component of the given type, in pre-order."""
        for descendant in self.descendants():
            for component in descendant.components(component_type):
                yield descendant, component

    def find_component(self, component_type: ComponentType) -> Component | None:
        return next(self.components(component_type), None)

    def find_component_in_parent(self, component_type: ComponentType) -> Component | None:
        return next((c for _, c in self.components_in_parent(component_type)), None)

    def find_component_in_children(self, component_type: ComponentType) -> Component | None:
        return next((c for _, c in self.components_in_children(component_type)), None)

    # Traversal

    def ancestors(self) -> Iterator["SceneObject"]:
        """Parent, grandparent and so on up to the root."""
        node = self._node.parent if self._node else None
        while node is not None:
            yield SceneObject(node)
            node = node.parent

    def descendants(self) -> Iterator["SceneObject"]:
        """All descendants in pre-order, first child first."""
        for obj, _ in self.walk_children(EnumDirection.FIRST_TO_LAST, EnumCallOrder.PRE_ORDER):
            yield obj

    def walk_children(
        self, direction: EnumDirection, call_order: EnumCallOrder
    ) -> Iterator[tuple["SceneObject", EnumCallOrder]]:
        """Depth-first walk of the descendants, reporting each visit with its call order."""
        if not self._node:
            return
        for node, order in self._node.walk(direction, call_order):
            yield SceneObject(node), order

    # Messages

    def send_message(self, message: ComponentMessage, params: ComponentMessageParams | None = None) -> None:
        """Send ``message`` to the components of this object."""
        if not self._node:
            return
        params = params if params is not None else ComponentMessageParams()
        params.scene_object = SceneObject(self._node)
        self._node.components.broadcast_message(message, params)

    def broadcast_message(
        self, message: ComponentMessage, params: ComponentMessageParams | None = None
    ) -> None:
        """Send ``message`` to the components of this object and of all its descendants."""
        if not self._node:
            return
        params = params if params is not None else ComponentMessageParams()
        self.send_message(message, params)
        for descendant in self.descendants():
            descendant.send_message(message, params)


class Scene:
    """A container of a scene object hierarchy under a hidden root."""

    def __init__(self) -> None:
        self._root: SceneNode | None = None
        self.next_scene: Scene | None = None

    def root_object(self) -> SceneObject:
        if self._root is None:
            self._root = SceneNode(self)
        return SceneObject(self._root)

    def add_object(self) -> SceneObject:
        """Add a new top-level object."""
        return self.root_object().append_child()

    def new_string(self, text: str) -> str:
        """Store ``text`` as a terminated string; anything after a NUL is lost."""
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return text.partition("\0")[0]

    def objects(self) -> Iterator[SceneObject]:
        """Top-level objects in order."""
        if self._root is None:
            return
        for node in list(self._root.children):
            yield SceneObject(node)