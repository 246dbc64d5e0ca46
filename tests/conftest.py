"""pytest configuration and fixtures for html-formgen tests."""

import pytest


@pytest.fixture(autouse=True)
def reset_form_config():
    """Every test starts from the default configuration."""
    from html_formgen.protocols import set_form_config

    set_form_config(None)
    yield
    set_form_config(None)


@pytest.fixture
def factory():
    """Field factory bound to an empty submission."""
    from html_formgen.forms import FieldFactory

    return FieldFactory()


@pytest.fixture
def factory_for():
    """Build a field factory for submitted (name, value) pairs."""
    from html_formgen.forms import FieldFactory
    from html_formgen.io import SubmissionContext

    def _factory_for(pairs=(), files=None):
        if isinstance(pairs, dict):
            pairs = list(pairs.items())
        return FieldFactory(SubmissionContext.from_pairs(pairs, files))

    return _factory_for
