"""Thin speedrun.com REST client: one GET per call, JSON decoded."""

import requests

from speedrun_export.constants import API_BASE_URL, HTTP_TIMEOUT, USER_AGENT


class FetchError(Exception):
    """Network, HTTP status or JSON decode failure for one request."""

    def __init__(self, url, message):
        super().__init__(f"{url}: {message}")
        self.url = url


class ApiClient:
    """GET wrapper over a requests session. No retries; callers decide what to swallow."""

    def __init__(self, base_url=API_BASE_URL, session=None, timeout=HTTP_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        })
        self.timeout = timeout

    def url_for(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def fetch(self, path, params=None):
        """GET `path` and return the parsed JSON body. Raises FetchError."""
        url = self.url_for(path)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(url, f"invalid JSON ({e})") from e
