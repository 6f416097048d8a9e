"""Tests for the Throxy scraping client and tech-stack collection."""

from unittest.mock import MagicMock

import pytest
import requests

from university_enricher.backends import BackendError
from university_enricher.models import University
from university_enricher.scraping import THROXY_BASE_URL, ThroxyClient, collect_tech_stacks


def make_response(status=200, body=None):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = body if body is not None else {}
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def client(session):
    return ThroxyClient("tx-test", session=session)


class TestThroxyClient:
    def test_sets_bearer_auth(self, client, session):
        assert session.headers["Authorization"] == "Bearer tx-test"

    def test_built_with(self, client, session):
        session.get.return_value = make_response(body={"success": True, "data": ["WordPress", "PHP"]})

        assert client.built_with("uba.ar") == ["WordPress", "PHP"]
        args, kwargs = session.get.call_args
        assert args[0] == f"{THROXY_BASE_URL}/built-with"
        assert kwargs["params"] == {"url": "uba.ar"}

    def test_website_markdown_scrape(self, client, session):
        session.get.return_value = make_response(body={"success": True, "data": "# UBA"})
        assert client.website_markdown_scrape("https://uba.ar") == "# UBA"

    def test_tavily_search_posts(self, client, session):
        session.post.return_value = make_response(body={"success": True, "data": {"results": []}})

        assert client.tavily_search("UBA linkedin") == {"results": []}
        args, kwargs = session.post.call_args
        assert args[0] == f"{THROXY_BASE_URL}/tavily-search"
        assert kwargs["json"] == {"query": "UBA linkedin"}

    def test_unsuccessful_envelope(self, client, session):
        session.get.return_value = make_response(body={"success": False, "error": "quota used"})
        with pytest.raises(BackendError, match="quota used"):
            client.built_with("uba.ar")

    @pytest.mark.parametrize("status,message", [
        (401, "Invalid Throxy API key"),
        (429, "Rate limit exceeded"),
        (502, "Throxy API server error"),
    ])
    def test_http_errors(self, client, session, status, message):
        session.get.return_value = make_response(status=status)
        with pytest.raises(BackendError) as exc_info:
            client.built_with("uba.ar")
        assert exc_info.value.message == message
        assert exc_info.value.status == status

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.ConnectionError("no route to host")
        with pytest.raises(BackendError, match="Throxy API Error"):
            client.built_with("uba.ar")


class TestCollectTechStacks:
    def test_fills_tech_stack_in_order(self):
        client = MagicMock()
        client.built_with.side_effect = lambda domain: {"a.edu": ["Drupal"], "b.edu": []}[domain]
        universities = [University(domain="a.edu", name="A"), University(domain="b.edu", name="B")]

        results = collect_tech_stacks(client, universities, concurrency_limit=2)

        assert results[0].tech_stack == ["Drupal"]
        assert results[1].tech_stack is None

    def test_failure_leaves_university_unchanged(self):
        client = MagicMock()
        client.built_with.side_effect = BackendError("Rate limit exceeded", status=429)
        universities = [University(domain="a.edu", name="A", tech_stack=["Old"])]

        results = collect_tech_stacks(client, universities)

        assert results == universities
