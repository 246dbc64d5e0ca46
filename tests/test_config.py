"""Tests for the global form configuration."""


def test_date_input_width():
    """Test that the configured width is used for date inputs."""
    from html_formgen.fields import DateInput
    from html_formgen.protocols import FormGenConfig, set_form_config

    set_form_config(FormGenConfig(date_input_width=120))

    assert 'style="width:120px;"' in DateInput("start").render()


def test_date_format():
    """Test validating ranges against another date format."""
    from html_formgen.forms import FieldFactory
    from html_formgen.protocols import FormGenConfig, set_form_config

    set_form_config(FormGenConfig(date_format="Y-m-d"))

    assert FieldFactory().date_range("r", "2020-01-31").render()


def test_locale():
    """Test that the default rule table follows the configured locale."""
    from html_formgen.protocols import FormGenConfig, set_form_config
    from html_formgen.validation import ValidationEngine

    set_form_config(FormGenConfig(locale="nl"))
    engine = ValidationEngine()
    engine.add_validation("naam", "required")
    engine.passes()

    assert engine.get_errors() == {"naam": ["naam is verplicht."]}


def test_defaults_restored():
    """Test that set_form_config(None) restores the defaults."""
    from html_formgen.protocols import get_form_config

    config = get_form_config()

    assert config.locale == "en"
    assert config.date_format == "d-m-Y"
    assert config.error_separator == "<br/>\n"
