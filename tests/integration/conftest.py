"""Integration test fixtures: a fake GitHub behind a mocked httpx client."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

API = "https://api.github.com"
RAW = "https://raw.githubusercontent.com"


def mock_response(status_code=200, json_body=None, text=None, headers=None):
    resp = MagicMock(spec=httpx.Response)
    resp.status_code = status_code
    if text is None:
        text = json.dumps(json_body) if json_body is not None else ""
    resp.text = text
    if json_body is not None:
        resp.json.return_value = json_body
    else:
        resp.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    resp.headers = headers or {}
    return resp


def dir_entry(path):
    return {"name": path.rsplit("/", 1)[-1], "type": "dir", "path": path, "url": f"{API}/contents/{path}"}


def file_entry(owner, repo, path):
    return {
        "name": path.rsplit("/", 1)[-1],
        "type": "file",
        "path": path,
        "download_url": f"{RAW}/{owner}/{repo}/main/{path}",
    }


class FakeGitHub:
    """Routes GET URLs to canned responses; unknown URLs answer 404."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[str] = []

    def add(self, url, response):
        self.routes[url if url.startswith("http") else f"{API}/{url}"] = response

    def add_repo(self, owner, repo, layout: dict[str, list[str]], files: dict[str, str] | None = None):
        """Register a repo whose top-level dirs map to lists of file names."""
        root = [dir_entry(d) for d in layout]
        self.add(f"repos/{owner}/{repo}/contents", root)
        for d, names in layout.items():
            self.add(f"repos/{owner}/{repo}/contents/{d}", [file_entry(owner, repo, f"{d}/{n}") for n in names])
            for n in names:
                text = (files or {}).get(f"{d}/{n}", f"contents of {d}/{n}")
                self.add(f"{RAW}/{owner}/{repo}/main/{d}/{n}", mock_response(200, text=text))

    def get(self, url, params=None):
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return mock_response(404, {"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, list) and route and isinstance(route[0], (Exception, MagicMock)):
            # Sequence of responses for repeated calls
            item = route.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        if isinstance(route, MagicMock):
            return route
        return mock_response(200, route)


@pytest.fixture(autouse=True)
def sleep():
    """Patch out time.sleep (pacing and retry backoff) to avoid real waits."""
    with patch("github_sql_manifest.pipeline.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def patched_httpx(fake_github):
    """Every httpx.Client created during the test talks to fake_github."""
    with patch("github_sql_manifest.client.httpx.Client") as mock_client_cls:
        instance = MagicMock()
        instance.get.side_effect = fake_github.get
        mock_client_cls.return_value = instance
        yield mock_client_cls
