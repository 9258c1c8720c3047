import pytest

from .helpers import FakeWeb


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def http_client(web: FakeWeb):
    client = web.client()
    yield client
    client.close()
