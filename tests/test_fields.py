"""Tests for the concrete field kinds."""

import pytest


def test_dropdown_render(factory):
    """Test options and the selected option."""
    dropdown = factory.dropdown("color", "2").append_options({"1": "Red", "2": "Green"})

    output = dropdown.render()

    assert output.startswith('<select id="color" name="color">\n')
    assert '<option value="1">Red</option>' in output
    assert '<option value="2" selected>Green</option>' in output


def test_dropdown_multiple(factory_for):
    """Test a multi-select with several posted values."""
    dropdown = factory_for([("color[]", "1"), ("color[]", "2")]).dropdown("color")
    dropdown.append_options({"1": "Red", "2": "Green", "3": "Blue"}).set_multiple(True)

    output = dropdown.render()

    assert 'name="color[]"' in output
    assert " multiple>" in output
    assert '<option value="2" selected>Green</option>' in output
    assert '<option value="3">Blue</option>' in output


def test_dropdown_optgroups(factory):
    """Test grouping options by category."""
    dropdown = factory.dropdown("car")
    dropdown.append_options({"a": "Audi", "b": "BMW"}, "German").append_option("v", "Volvo", "Swedish")

    output = dropdown.render()

    assert '<optgroup label="German">\n<option value="a">Audi</option>\n<option value="b">BMW</option>\n</optgroup>' in output
    assert '<optgroup label="Swedish">' in output


def test_option_order(factory):
    """Test prepending and removing options."""
    dropdown = factory.dropdown("d").append_option("b", "B")

    dropdown.prepend_options({"x": "X", "y": "Y"})
    assert dropdown.allowed_values() == ["x", "y", "b"]

    dropdown.remove_option("x")
    assert dropdown.options() == [("y", "Y"), ("b", "B")]
    assert dropdown.get_categories() is None


def test_checkbox_group(factory_for):
    """Test a checkbox group with posted values."""
    checkbox = factory_for([("tags[]", "a"), ("tags[]", "c")]).checkbox("tags")
    checkbox.append_options({"a": "A", "b": "B", "c": "C"})

    output = checkbox.render()

    assert output.count('name="tags[]"') == 3
    assert 'id="tags_0" name="tags[]" value="a" checked />' in output
    assert 'id="tags_1" name="tags[]" value="b" />' in output
    assert '<label for="tags_2">C</label>' in output


def test_single_checkbox(factory_for):
    """Test a checkbox without options."""
    checkbox = factory_for({"agree": "1"}).checkbox("agree")

    assert checkbox.render() == '<input type="checkbox" id="agree" name="agree" value="1" checked />\n'


def test_radio(factory):
    """Test a radio group."""
    radio = factory.radio("size", "m").append_options({"s": "Small", "m": "Medium"})

    output = radio.render()

    assert 'id="size_1" name="size" value="m" checked />' in output
    assert output.count('name="size"') == 2


def test_buttons(factory):
    """Test that buttons carry the btn class."""
    submit = factory.submit("go", "Go")

    assert submit.get_classes() == ["btn"]
    assert submit.render() == '<input type="submit" id="go" class="btn" name="go" value="Go" />\n'
    assert factory.reset("clear").type == "reset"


def test_password_hides_value(factory_for):
    """Test that a password is never rendered back."""
    password = factory_for({"pw": "secret"}).password("pw")

    assert password.is_posted()
    assert "secret" not in password.render()


def test_hidden_has_no_label(factory):
    """Test that a hidden input ignores its label."""
    hidden = factory.hidden("h", "1").set_label("Label")

    assert hidden.render() == '<input type="hidden" id="h" name="h" value="1" />\n'


def test_custom_type(factory):
    """Test an author chosen input type."""
    phone = factory.custom("tel", "phone").set_placeholder("+31")

    output = phone.render()

    assert 'type="tel"' in output
    assert 'placeholder="+31"' in output


def test_textarea(factory):
    """Test the textarea content."""
    notes = factory.textarea("notes", "a < b")

    assert notes.render() == '<textarea id="notes" name="notes">a &lt; b</textarea>\n'


def test_text_max_length(factory):
    """Test the maxlength attribute."""
    text = factory.text("t").set_max_length(20)

    assert ' maxlength="20"' in text.render()


def test_date_input_render(factory):
    """Test the date container, default width and maxlength."""
    date = factory.date("start", "01-01-2020")

    output = date.render()

    assert output.startswith('<div id="start-container" style="float: left;">')
    assert 'style="width:80px;"' in output
    assert 'maxlength="10"' in output
    assert output.endswith("</div>\n")


def test_hidden_date_hides_container(factory):
    """Test that a hidden date hides its container, not the input."""
    date = factory.date("start").set_hidden(True)

    output = date.render()

    assert 'style="float: left; display:none;"' in output
    assert 'style="width:80px;"' in output


def test_pad_date():
    """Test zero padding typed dates."""
    from html_formgen.fields import pad_date

    assert pad_date("1-2-2020") == "01-02-2020"
    assert pad_date("01-02-2020") == "01-02-2020"


def test_file_input(factory_for, tmp_path):
    """Test reading an uploaded file."""
    from html_formgen.io import UploadedFile

    path = tmp_path / "upload.csv"
    path.write_text("a\nb\n", encoding="utf-8")
    upload = factory_for(files={"upload": UploadedFile("upload.csv", path)}).file("upload")

    assert upload.is_posted()
    assert upload.get_contents() == "a\nb\n"
    assert upload.get_lines() == ["a", "b"]
    assert upload.get_file().filename == "upload.csv"


def test_file_input_without_upload(factory):
    """Test a file input nothing was uploaded for."""
    upload = factory.file("upload")

    assert not upload.is_posted()
    assert upload.get_contents() is None
    assert upload.get_lines() is None
    assert ' size="40"' in upload.render()


def test_file_input_rejects_non_utf8(factory_for, tmp_path):
    """Test that undecodable uploads raise instead of being altered."""
    from html_formgen.io import UploadedFile

    path = tmp_path / "upload.csv"
    path.write_bytes(b"name\n\xff\xfe\n")
    upload = factory_for(files={"upload": UploadedFile("upload.csv", path)}).file("upload")

    with pytest.raises(UnicodeDecodeError):
        upload.get_contents()
    with pytest.raises(UnicodeDecodeError):
        upload.get_lines()
