import os, pytest
import requests

def pytest_addoption(parser):
    parser.addoption("--graphql-url", action="store", default=os.getenv("READER_GRAPHQL_URL"))

def pytest_configure(config):
    config.addinivalue_line("markers", "reader: needs a running rollups reader node")

@pytest.fixture(scope="session")
def graphql_url(pytestconfig):
    url = pytestconfig.getoption("--graphql-url", default=os.getenv("READER_GRAPHQL_URL"))
    if not url:
        pytest.skip("READER_GRAPHQL_URL not set")
    try:
        requests.post(url, json={"query": "{ __typename }"}, timeout=5)
    except requests.RequestException as exc:
        pytest.skip(f"reader node unreachable: {exc}")
    return url
