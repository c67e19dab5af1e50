import pytest

from siteurls.routing import clear_route_index_cache


@pytest.fixture(autouse=True)
def _fresh_route_cache():
    """Route indexes are cached per source key; start every test empty."""
    clear_route_index_cache()
    yield
    clear_route_index_cache()
