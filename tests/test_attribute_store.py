"""Tests for the ordered attribute store."""


def test_parse_style_string():
    """Test parsing a declaration string into an ordered dict."""
    from html_formgen.core import AttributeStore

    assert AttributeStore.parse("color: red; padding: 8px;") == {"color": "red", "padding": "8px"}
    assert AttributeStore.parse("bogus; color:red") == {"color": "red"}
    assert AttributeStore.parse(None) == {}


def test_merge_overwrites_given_declarations_only():
    """Test that merge keeps untouched declarations and their order."""
    from html_formgen.core import AttributeStore

    store = AttributeStore("color:red; width:80px")
    store.merge("color: blue")

    assert store.all() == {"color": "blue", "width": "80px"}
    assert list(store) == ["color", "width"]


def test_render():
    """Test rendering as an inline style value."""
    from html_formgen.core import AttributeStore

    store = AttributeStore("color:red")
    store.merge({"width": "80px"})

    assert store.render() == "color:red; width:80px;"
    assert AttributeStore().render() == ""
    assert AttributeStore().is_empty()


def test_remove_ignores_values():
    """Test that remove forgets attributes whatever value is given."""
    from html_formgen.core import AttributeStore

    store = AttributeStore("color:red; width:80px")
    store.remove("width:1px")

    assert "width" not in store
    assert store == {"color": "red"}


def test_without_returns_copy():
    """Test that without leaves the store itself unchanged."""
    from html_formgen.core import AttributeStore

    store = AttributeStore("color:red; width:80px")

    assert store.without("width") == {"color": "red"}
    assert store.get("width") == "80px"
