"""Components that make up scene objects, lists of them and a factory by type name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator

__all__ = [
    "ComponentMessage",
    "ComponentMessageParams",
    "Component",
    "ComponentList",
    "ComponentFactory",
]


class ComponentMessage(Enum):
    """Messages a component can receive."""

    ADDED = auto()
    REMOVED = auto()
    APPLY = auto()


@dataclass
class ComponentMessageParams:
    """Parameters travelling with a message: the scene object being addressed."""

    scene_object: Any = None


class Component:
    """Base of all components.

    Subclasses override :meth:`added`, :meth:`removed` and :meth:`apply`;
    the type of a component is the name of its class.
    """

    def __init__(self) -> None:
        self._removed = False
        self.scene: Any = None

    @classmethod
    def type_name(cls) -> str:
        """Name identifying the component type."""
        return cls.__name__

    def send_message(self, message: ComponentMessage, params: ComponentMessageParams) -> None:
        """Dispatch ``message`` to the matching handler; other messages are ignored."""
        handler = {
            ComponentMessage.ADDED: self.added,
            ComponentMessage.REMOVED: self.removed,
            ComponentMessage.APPLY: self.apply,
        }.get(message)
        if handler is not None:
            handler(params.scene_object)

    def remove(self) -> None:
        """Mark the component for removal on the next broadcast."""
        self._removed = True

    def is_removed(self) -> bool:
        return self._removed

    def added(self, scene_object: Any) -> None:
        """Called once the component has been added to a scene object."""

    def removed(self, scene_object: Any) -> None:
        """Called when the component is dropped from its scene object."""

    def apply(self, scene_object: Any) -> None:
        """Called for the apply message."""


class ComponentList:
    """Ordered components of one scene object."""

    def __init__(self) -> None:
        self._items: list[Component] = []

    def append(self, component: Component) -> None:
        self._items.append(component)

    def __iter__(self) -> Iterator[Component]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        """Drop every component without sending messages."""
        self._items.clear()

    def broadcast_message(self, message: ComponentMessage, params: ComponentMessageParams) -> None:
        """Send ``message`` to every live component.

        Components marked for removal are dropped instead and receive the
        removed message.
        """
        for component in tuple(self._items):
            if component.is_removed():
                self._items = [c for c in self._items if c is not component]
                component.send_message(ComponentMessage.REMOVED, params)
            else:
                component.send_message(message, params)


class ComponentFactory:
    """Makes components from their type name."""

    def __init__(self, *args: type[Component]) -> None:
        self._makers: dict[str, type[Component]] = {}
        for component_class in args:
            self.register(component_class)

    def register(self, component_class: type[Component]) -> None:
        """Register a component class under its type name."""
        name = component_class.type_name()
        if name in self._makers:
            raise ValueError(f"component type {name!r} is already registered")
        self._makers[name] = component_class

    def make_component(self, type_name: str, scene: Any) -> Component | None:
        """Make a component of the named type for ``scene``, or None if the type is unknown."""
        component_class = self._makers.get(type_name)
        if component_class is None:
            return None
        component = component_class()
        component.scene = scene
        return component