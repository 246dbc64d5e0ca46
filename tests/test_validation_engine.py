"""Tests for the validation engine."""

import pytest


def test_add_validation_merges_rules(factory):
    """Test that repeated registrations for one field merge by rule name."""
    from html_formgen.validation import ValidationEngine

    field = factory.text("text", "value")
    engine = ValidationEngine()

    engine.add_validation(field, "required|min:5", message="This is a message")
    entry = engine.get_validations()["text"]
    assert entry.data is None
    assert entry.rule_texts() == ["required", "min:5"]
    assert entry.message == "This is a message"

    engine.add_validation(field, ["alpha_dash", "between:4,8", "required"])
    validations = engine.get_validations()
    assert list(validations) == ["text"]
    assert validations["text"].rule_texts() == ["required", "min:5", "alpha_dash", "between:4,8"]
    assert validations["text"].message == "This is a message"


def test_first_registered_parameters_win():
    """Test that a rule already present keeps its parameters."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()
    engine.add_validation("age", "min:5")
    engine.add_validation("age", "min:7")

    assert engine.get_validations()["age"].rule_texts() == ["min:5"]


def test_captured_data_is_kept(factory_for):
    """Test that a later registration by name does not drop the captured data."""
    from html_formgen.validation import ValidationEngine

    field = factory_for({"name": "abc"}).text("name")
    engine = ValidationEngine()
    engine.add_validation(field, "required")
    engine.add_validation("name", "min:2")

    entry = engine.get_validations()["name"]
    assert entry.data == "abc"
    assert entry.rule_texts() == ["required", "min:2"]


def test_unknown_rule():
    """Test that an unknown rule fails loud and registers nothing."""
    from html_formgen.validation import UnknownRule, ValidationEngine

    engine = ValidationEngine()

    with pytest.raises(UnknownRule, match=r'Invalid rule "invalid_rule" specified\.'):
        engine.add_validation("x", "invalid_rule")
    with pytest.raises(UnknownRule):
        engine.add_validation("x", "required|nope")
    assert engine.get_validations() == {}


def test_invalid_target_type():
    """Test that only names and validation targets are accepted."""
    from html_formgen.validation import ValidationEngine

    with pytest.raises(TypeError):
        ValidationEngine().add_validation(42, "required")


def test_validate_accumulates_errors():
    """Test that immediate validation errors pile up per name."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()

    assert not engine.validate("test", "this is not numeric", "numeric|email")
    assert engine.validate("test", "test@domain.com", "email")
    assert len(engine.get_attribute_errors("test")) == 2
    assert [str(rule) for rule in engine.get_failed_rules("test")] == ["numeric", "email"]


def test_validate_date_format():
    """Test dates with and without leading zeroes."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()

    assert engine.validate("test", "28-02-2013", "date_format:d-m-Y")
    assert engine.validate("test", "8-2-2013", "date_format:d-m-Y")
    assert engine.passes()


def test_validate_quoted_value_list():
    """Test an allow-list holding the delimiter characters."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()

    assert engine.validate("test", ",", 'in:"TAB", ";", ","')
    assert engine.validate("test", "TAB", ['in:"TAB", "|", ","'])
    assert not engine.validate("test", "x", 'in:"TAB", ";", ","')


def test_passes(factory_for):
    """Test evaluating pending rules against captured data."""
    from html_formgen.validation import ValidationEngine

    field = factory_for({"text": "value"}).text("text")
    engine = ValidationEngine()

    engine.add_validation(field, "required|min:5|between:4,8")
    assert engine.passes()
    assert engine.get_errors() == {}

    engine.add_validation(field, "numeric|date")
    assert not engine.passes()
    assert engine.fails()
    assert len(engine.get_errors()["text"]) == 2


def test_passes_is_idempotent():
    """Test that evaluating twice gives the same errors."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()
    engine.add_validation("email", "required|email")

    first = engine.passes()
    errors = engine.get_errors()

    assert engine.passes() == first
    assert engine.get_errors() == errors
    assert errors == {"email": ["The email field is required."]}


def test_messages(factory):
    """Test catalogue messages and custom messages."""
    from html_formgen.validation import ValidationEngine

    field = factory.text("my_name")

    engine = ValidationEngine()
    engine.add_validation(field, "required")
    engine.passes()
    assert engine.get_errors()["my_name"] == ["The my name field is required."]

    engine = ValidationEngine()
    engine.add_validation(field, "required", message=":attribute is required.")
    engine.passes()
    assert engine.get_errors()["my_name"] == ["my name is required."]


def test_all_in_with_multiple_values(factory_for):
    """Test allow-list checks on multi-value submissions."""
    from html_formgen.validation import ValidationEngine

    factory = factory_for([
        ("test1[]", "one"), ("test1[]", "two"), ("test1[]", "three"),
        ("test2[]", "one"), ("test2[]", "FAIL"),
    ])
    engine = ValidationEngine()

    engine.add_validation(factory.checkbox("test1"), "required|all_in:one,two,three")
    assert engine.passes()

    engine.add_validation(factory.checkbox("test2"), "required|all_in:one,two,three")
    assert not engine.passes()
    assert engine.get_errors() == {"test2": ["The selected test2 is invalid."]}


def test_blank_values_pass_non_implicit_rules():
    """Test that optional rules do not fail a missing value."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()
    engine.add_validation("age", "numeric|min:18")

    assert engine.passes()


def test_range_error_fallback():
    """Test that a range answers with the errors of its children."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()
    engine.add_validation("period-to", "required")
    engine.passes()

    assert engine.get_attribute_errors("period") == ["The period to field is required."]
    assert engine.get_attribute_errors("other") == []


def test_range_error_fallback_prefers_from():
    """Test that the -from child answers first when both children failed."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()
    engine.add_validation("period-from", "required")
    engine.add_validation("period-to", "required")
    engine.passes()

    assert engine.get_attribute_errors("period") == ["The period from field is required."]


def test_reset():
    """Test that reset clears rules and errors."""
    from html_formgen.validation import ValidationEngine

    engine = ValidationEngine()
    engine.validate("a", "x", "numeric")
    engine.add_validation("b", "required")
    engine.passes()

    engine.reset()

    assert engine.get_errors() == {}
    assert engine.get_validations() == {}
    assert engine.passes()


def test_injected_rule_table():
    """Test validating through a custom rule table."""
    from html_formgen.validation import RuleTable, UnknownRule, ValidationEngine

    table = RuleTable(
        rules={"even": lambda value, parameters: int(value) % 2 == 0},
        resolve_message=lambda rule, label, parameters: f"{label} must be {rule}",
    )
    engine = ValidationEngine(table)

    assert not engine.validate("n", "3", "even")
    assert engine.get_errors() == {"n": ["n must be even"]}
    with pytest.raises(UnknownRule):
        engine.add_validation("n", "required")
