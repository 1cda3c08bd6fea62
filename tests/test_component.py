import pytest

from sgraph.component import (
    Component,
    ComponentFactory,
    ComponentList,
    ComponentMessage,
    ComponentMessageParams,
)


class Recorder(Component):
    def __init__(self):
        super().__init__()
        self.events = []

    def added(self, scene_object):
        self.events.append(("added", scene_object))

    def removed(self, scene_object):
        self.events.append(("removed", scene_object))

    def apply(self, scene_object):
        self.events.append(("apply", scene_object))


class SelfRemoving(Recorder):
    def apply(self, scene_object):
        super().apply(scene_object)
        self.remove()


def test_type_name_is_class_name():
    assert Component.type_name() == "Component"
    assert Recorder.type_name() == "Recorder"
    assert Recorder().type_name() == "Recorder"
    assert SelfRemoving.type_name() == "SelfRemoving"
    factory = ComponentFactory(SelfRemoving)
    made = factory.make_component(SelfRemoving.type_name(), None)
    assert type(made) is SelfRemoving


def test_send_message_dispatches_to_handler():
    marker = object()
    component = Recorder()
    component.send_message(ComponentMessage.ADDED, ComponentMessageParams(marker))
    component.send_message(ComponentMessage.APPLY, ComponentMessageParams(marker))
    assert component.events == [("added", marker), ("apply", marker)]


def test_remove_marks_component():
    component = Recorder()
    components = ComponentList()
    components.append(component)
    assert component.is_removed() is False
    component.remove()
    assert component.is_removed() is True
    components.broadcast_message(ComponentMessage.APPLY, ComponentMessageParams())
    assert len(components) == 0


def test_broadcast_drops_removed_components():
    marker = object()
    first, second = Recorder(), Recorder()
    components = ComponentList()
    components.append(first)
    components.append(second)
    second.remove()

    components.broadcast_message(ComponentMessage.APPLY, ComponentMessageParams(marker))

    assert first.events == [("apply", marker)]
    assert second.events == [("removed", marker)]
    assert list(components) == [first]
    assert len(components) == 1


def test_self_removal_takes_effect_on_next_broadcast():
    component = SelfRemoving()
    components = ComponentList()
    components.append(component)
    params = ComponentMessageParams()

    components.broadcast_message(ComponentMessage.APPLY, params)
    assert len(components) == 1
    components.broadcast_message(ComponentMessage.APPLY, params)
    assert len(components) == 0
    assert [name for name, _ in component.events] == ["apply", "removed"]


def test_iteration_keeps_order_and_clear_empties():
    items = [Recorder() for _ in range(3)]
    components = ComponentList()
    for item in items:
        components.append(item)
    assert list(components) == items
    components.clear()
    assert list(components) == []


def test_factory_makes_registered_types():
    scene = object()
    factory = ComponentFactory(Recorder, SelfRemoving)
    made = factory.make_component("SelfRemoving", scene)
    assert type(made) is SelfRemoving
    assert made.scene is scene


def test_factory_unknown_type_gives_none():
    factory = ComponentFactory(Recorder)
    assert factory.make_component("Missing", None) is None


def test_factory_register_later_and_duplicates():
    factory = ComponentFactory()
    assert factory.make_component("Recorder", None) is None
    factory.register(Recorder)
    assert isinstance(factory.make_component("Recorder", None), Recorder)
    with pytest.raises(ValueError):
        factory.register(Recorder)