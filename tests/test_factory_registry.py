"""Tests for the field registry and factory."""

import pytest


def test_registered_kinds():
    """Test looking up field kinds by id."""
    from html_formgen.fields import DateRangeInput, TextArea
    from html_formgen.forms import get_field_class

    assert get_field_class("date_range") is DateRangeInput
    assert get_field_class("textarea") is TextArea


def test_unknown_kind():
    """Test the error for an unregistered id."""
    from html_formgen.forms import get_field_class

    with pytest.raises(KeyError, match="Available fields"):
        get_field_class("spinner")


def test_abstract_fields_are_not_registered():
    """Test that base classes stay out of the registry."""
    import html_formgen.fields  # noqa: F401
    from html_formgen.fields import ChoiceField
    from html_formgen.forms import FIELD_IMPLEMENTATIONS, CompositeField, FieldNode

    registered = set(FIELD_IMPLEMENTATIONS.values())

    assert FieldNode not in registered
    assert CompositeField not in registered
    assert ChoiceField not in registered


def test_factory_create(factory_for):
    """Test creating fields by id against the factory's submission."""
    from html_formgen.fields import TextArea

    factory = factory_for({"notes": "hello"})
    notes = factory.create("textarea", "notes")

    assert isinstance(notes, TextArea)
    assert notes.submission is factory.submission
    assert notes.posted == "hello"


def test_new_kind_registers_itself(factory):
    """Test that defining a concrete kind makes it available to create()."""
    from html_formgen.fields import Text

    class Stars(Text):
        _field_type = "stars"

    assert isinstance(factory.create("stars", "rating"), Stars)
