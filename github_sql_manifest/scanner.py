"""List a user's repositories and the directories inside them."""

from urllib.parse import quote

from .client import GitHubApiClient
from .exceptions import MalformedResponseError
from .models import ContentEntry, RepositoryRef

REPOS_PER_PAGE = 100  # GitHub maximum for /users/{owner}/repos


def list_repositories(client: GitHubApiClient, owner: str) -> list[RepositoryRef]:
    """All public repositories of owner, following pagination.

    Returns an empty list when the user does not exist.
    """
    repos: list[RepositoryRef] = []
    page = 1
    while True:
        body = client.get(f"users/{quote(owner)}/repos", params={"per_page": REPOS_PER_PAGE, "page": page})
        if body is None:
            break
        if not isinstance(body, list):
            raise MalformedResponseError(f"Expected a repository list for {owner}")
        repos.extend(RepositoryRef.from_api(owner, item) for item in body)
        if len(body) < REPOS_PER_PAGE:
            break
        page += 1
    return repos


def filter_repositories(
    repos: list[RepositoryRef],
    platforms: list[str],
    keywords: list[str],
) -> list[RepositoryRef]:
    """Keep repos whose name contains every keyword and, if given, a platform."""
    kept = []
    for repo in repos:
        name = repo.name.lower()
        if not all(k.lower() in name for k in keywords):
            continue
        if platforms and not any(p.lower() in name for p in platforms):
            continue
        kept.append(repo)
    return kept


def detect_platform(repo_name: str, platforms: list[str], default: str | None = None) -> str:
    """First configured platform named in repo_name, else default, else the repo name."""
    name = repo_name.lower()
    for platform in platforms:
        if platform.lower() in name:
            return platform
    return default or repo_name


def list_directory(
    client: GitHubApiClient,
    owner: str,
    repo: str,
    path: str = "",
) -> list[ContentEntry] | None:
    """Contents of a directory, or None when it does not exist."""
    endpoint = f"repos/{quote(owner)}/{quote(repo)}/contents"
    path = path.strip("/")
    if path:
        endpoint = f"{endpoint}/{quote(path)}"

    body = client.get(endpoint)
    if body is None:
        return None
    if not isinstance(body, list):
        # A file path returns a single object instead of a listing
        raise MalformedResponseError(f"Expected a directory listing for {owner}/{repo}/{path}")
    return [ContentEntry.from_api(item) for item in body]


def list_subdirectories(
    client: GitHubApiClient,
    owner: str,
    repo: str,
    path: str = "",
) -> list[ContentEntry] | None:
    entries = list_directory(client, owner, repo, path)
    if entries is None:
        return None
    return [e for e in entries if e.is_dir]
