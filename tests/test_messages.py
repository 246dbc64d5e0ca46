"""Tests for the validation message catalogue."""


def test_format_attribute_label():
    """Test deriving a human label from a field name."""
    from html_formgen.validation import format_attribute_label

    assert format_attribute_label("my_name") == "my name"
    assert format_attribute_label("range-from") == "range from"


def test_resolve_fills_placeholders():
    """Test that parameters land in their placeholders."""
    from html_formgen.validation import MessageCatalog

    catalog = MessageCatalog.load("en")

    assert catalog.resolve("between", "age", ("18", "65")) == "The age must be between 18 and 65."
    assert catalog.resolve("date_format", "start", ("d-m-Y",)) == "The start does not match the format d-m-Y."
    assert catalog.resolve("in", "color", ("r", "g")) == "The selected color is invalid."


def test_unknown_rule_uses_default_message():
    """Test the fallback template for rules without a message."""
    from html_formgen.validation import MessageCatalog

    assert MessageCatalog.load("en").resolve("whatever", "age") == "The age field is invalid."


def test_unknown_locale_falls_back_to_english():
    """Test loading a locale that is not bundled."""
    from html_formgen.validation import MessageCatalog

    catalog = MessageCatalog.load("xx")

    assert catalog.locale == "en"
    assert catalog.resolve("required", "name") == "The name field is required."


def test_dutch_messages():
    """Test the bundled Dutch catalogue."""
    from html_formgen.validation import MessageCatalog

    assert MessageCatalog.load("nl").resolve("required", "naam") == "naam is verplicht."


def test_custom_messages_dir(tmp_path):
    """Test that a messages directory takes precedence over the bundled files."""
    from html_formgen.validation import MessageCatalog

    (tmp_path / "en.yaml").write_text("required: ':attribute is a must'\n", encoding="utf-8")

    catalog = MessageCatalog.load("en", str(tmp_path))

    assert catalog.resolve("required", "name") == "name is a must"
    assert catalog.resolve("email", "name") == "The name field is invalid."


def test_render_custom_template():
    """Test rendering an author supplied template."""
    from html_formgen.validation import MessageCatalog

    assert MessageCatalog.render(":attribute must be :min", "min", "age", ("5",)) == "age must be 5"
