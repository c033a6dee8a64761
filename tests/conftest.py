import pytest

from helpers import load_page, make_stories
from hnradar.tui.state import initial_state


@pytest.fixture
def stories():
    return make_stories(20)


@pytest.fixture
def loaded_state(stories):
    """Stories view with the first page of 20 stories loaded, out of 500 ids."""
    state, _ = initial_state()
    return load_page(state, stories)
