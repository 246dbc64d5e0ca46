"""Tests for attribute broadcasting between fields."""

import pytest


def test_dependent_keeps_its_own_classes(factory):
    """Test that broadcast classes are added to the dependent's own."""
    subject = factory.text("subject")
    child = factory.text("child").add_class("x")
    subject.register_dependent(child)

    subject.add_class("shared")

    assert child.get_classes() == ["x", "shared"]


def test_width_is_not_broadcast(factory):
    """Test that a dependent's width survives a style change on the subject."""
    subject = factory.text("subject")
    child = factory.text("child").set_width(40)
    subject.register_dependent(child)

    subject.set_width(300).add_style("color:red")

    assert child.get_width() == "40px"
    assert child.get_style("color") == "red"


def test_scalars_overwrite(factory):
    """Test that scalar attributes follow the subject."""
    subject = factory.text("subject")
    child = factory.text("child")
    subject.register_dependent(child)

    subject.set_disabled("readonly")
    assert child.disabled == "readonly"

    subject.remove_disabled()
    assert child.disabled is None


def test_data_attributes_merge(factory):
    """Test that data attributes merge into the dependent's own."""
    subject = factory.text("subject")
    child = factory.text("child").add_data_attribute("own", "1")
    subject.register_dependent(child)

    subject.add_data_attribute("shared", "2")

    assert child.get_data_attributes() == {"own": "1", "shared": "2"}


def test_broadcast_chains(factory):
    """Test that a dependent passes attributes on to its own dependents."""
    subject = factory.text("subject")
    child = factory.text("child")
    grandchild = factory.text("grandchild")
    subject.register_dependent(child)
    child.register_dependent(grandchild)

    subject.add_class("a")

    assert grandchild.get_classes() == ["a"]


def test_rejected_setter_does_not_undo_broadcast(factory):
    """Test that a failing setter leaves earlier broadcasts in place."""
    subject = factory.text("subject")
    child = factory.text("child")
    subject.register_dependent(child)

    subject.add_class("ok")
    subject.set_size("big")

    assert child.get_classes() == ["ok"]
    assert child.size is None


def test_notify_in_registration_order():
    """Test that dependents are updated in the order they registered."""
    from html_formgen.forms import AttributeBroadcaster
    from html_formgen.protocols import AttributePropagation

    calls = []

    class Recorder(AttributePropagation):
        def __init__(self, label):
            self.label = label

        def get_attributes(self):
            return {}

        def set_attributes(self, attributes):
            calls.append(self.label)

    broadcaster = AttributeBroadcaster()
    first, second = Recorder("first"), Recorder("second")
    broadcaster.register_dependent(first)
    broadcaster.register_dependent(second)
    broadcaster.register_dependent(first)

    broadcaster.notify(Recorder("subject"))

    assert calls == ["first", "second"]
    assert len(broadcaster) == 2


def test_register_requires_propagation_capability():
    """Test that only attribute propagating objects can register."""
    from html_formgen.forms import AttributeBroadcaster

    with pytest.raises(TypeError):
        AttributeBroadcaster().register_dependent(object())
