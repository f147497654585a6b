"""Category G: API Client Tests

ApiClient against a fake requests session: URL building, params,
and the three ways a request can fail.
"""

import pytest
import requests

from speedrun_export.api_client import ApiClient, FetchError


class FakeResponse:
    def __init__(self, status=200, body=None, text=None):
        self.status_code = status
        self._body = body
        self._text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._text is not None:
            raise ValueError(f"Expecting value: {self._text[:10]!r}")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response


class TestG1_Requests:
    def test_url_and_params(self):
        session = FakeSession(FakeResponse(body={"data": []}))
        client = ApiClient("https://api.example/v1/", session=session, timeout=5)
        assert client.fetch("/runs", params={"game": "g1"}) == {"data": []}
        assert session.requests == [("https://api.example/v1/runs", {"game": "g1"}, 5)]

    def test_user_agent_set(self):
        session = FakeSession(FakeResponse(body={}))
        ApiClient(session=session)
        assert "User-Agent" in session.headers

    def test_default_base_url(self):
        client = ApiClient(session=FakeSession())
        assert client.url_for("games/abc") == "https://www.speedrun.com/api/v1/games/abc"


class TestG2_Failures:
    def test_http_error(self):
        client = ApiClient(session=FakeSession(FakeResponse(status=420)))
        with pytest.raises(FetchError) as exc:
            client.fetch("games/abc")
        assert "games/abc" in str(exc.value)
        assert isinstance(exc.value.__cause__, requests.HTTPError)

    def test_connection_error(self):
        client = ApiClient(session=FakeSession(error=requests.ConnectionError("refused")))
        with pytest.raises(FetchError):
            client.fetch("games/abc")

    def test_timeout(self):
        client = ApiClient(session=FakeSession(error=requests.Timeout("slow")))
        with pytest.raises(FetchError):
            client.fetch("games/abc")

    def test_bad_json(self):
        client = ApiClient(session=FakeSession(FakeResponse(text="<html>rate limited</html>")))
        with pytest.raises(FetchError, match="invalid JSON"):
            client.fetch("games/abc")
