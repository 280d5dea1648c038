"""Scan repositories for problem directories and turn them into records."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import httpx

from .client import GitHubApiClient
from .exceptions import EmptyResultError, GitHubApiError, MalformedResponseError, RateLimitError
from .locator import Artifacts, locate_artifacts
from .models import ContentEntry, ProblemRecord, RepositoryRef
from .scanner import detect_platform, filter_repositories, list_directory, list_repositories, list_subdirectories
from .settings import Settings
from .titles import extract_number, normalize_title

logger = logging.getLogger(__name__)

# Errors that only cost us the current directory (or repository)
SKIPPABLE_ERRORS = (GitHubApiError, MalformedResponseError, httpx.HTTPError)


@dataclass
class ScanResult:
    records: list[ProblemRecord] = field(default_factory=list)
    stats: dict = field(
        default_factory=lambda: {"repos": 0, "directories": 0, "records": 0, "skipped": 0, "errors": 0}
    )


def resolve_repositories(client: GitHubApiClient, settings: Settings) -> list[RepositoryRef]:
    """The configured repository, or every matching repository of the owner."""
    if settings.repository:
        return [RepositoryRef(owner=settings.owner, name=settings.repository)]

    print(f"Fetching repositories for user: {settings.owner}", flush=True)
    repos = list_repositories(client, settings.owner)
    if not repos:
        raise EmptyResultError(f"No repositories found for {settings.owner}")
    print(f"Found {len(repos)} repositories", flush=True)

    relevant = filter_repositories(repos, settings.platforms, settings.keywords)
    if not relevant:
        raise EmptyResultError("No SQL repositories found")
    print(f"Found {len(relevant)} SQL practice repositories", flush=True)
    return relevant


def download_artifacts(client: GitHubApiClient, artifacts: Artifacts) -> tuple[str | None, str | None]:
    """Fetch code and description text side by side; either may come back None."""

    def _download(entry: ContentEntry | None) -> str | None:
        if entry is None or not entry.download_url:
            return None
        return client.fetch_raw(entry.download_url)

    with ThreadPoolExecutor(max_workers=2) as executor:
        code = executor.submit(_download, artifacts.code)
        description = executor.submit(_download, artifacts.description)
        return code.result(), description.result()


def inspect_directory(
    client: GitHubApiClient,
    settings: Settings,
    repo: RepositoryRef,
    directory: ContentEntry,
    platform: str,
) -> ProblemRecord | None:
    """Record for one directory, or None when it holds no code file."""
    entries = list_directory(client, repo.owner, repo.name, directory.path)
    if entries is None:
        return None

    artifacts = locate_artifacts(entries, settings.code_extension, settings.description_names)
    if not artifacts.found:
        return None

    record = ProblemRecord(
        platform=platform,
        title=normalize_title(directory.name, settings.resolved_title_style),
        number=extract_number(directory.name),
        repo=repo.name,
        path=directory.path,
        folder_name=directory.name,
        sql_file_name=artifacts.code.name,
        tags=list(settings.tags),
    )
    if settings.mode == "content":
        record.sql_code, record.description = download_artifacts(client, artifacts)
        if record.sql_code is None:
            logger.warning("Could not download %s in %s", artifacts.code.name, directory.path)
    else:
        record.sql_url = artifacts.code.download_url
        record.readme_url = artifacts.description.download_url if artifacts.description else None
    return record


def scan_repository(
    client: GitHubApiClient,
    settings: Settings,
    repo: RepositoryRef,
    result: ScanResult,
) -> None:
    platform = detect_platform(repo.name, settings.platforms, settings.platform)

    time.sleep(settings.request_delay)
    directories = list_subdirectories(client, repo.owner, repo.name, settings.root_path)
    if directories is None:
        print("  Could not fetch contents", flush=True)
        return
    print(f"  Found {len(directories)} directories", flush=True)

    total = len(directories)
    for start in range(0, total, settings.batch_size):
        batch = directories[start : start + settings.batch_size]
        for offset, directory in enumerate(batch, start=start + 1):
            time.sleep(settings.request_delay)
            result.stats["directories"] += 1
            try:
                record = inspect_directory(client, settings, repo, directory, platform)
            except RateLimitError:
                raise
            except SKIPPABLE_ERRORS as e:
                result.stats["errors"] += 1
                logger.error("Error processing %s: %s", directory.path, e)
                continue

            if record is None:
                result.stats["skipped"] += 1
                print(f"    [{offset}/{total}] {directory.name}: no {settings.code_extension} file", flush=True)
                continue

            result.records.append(record)
            result.stats["records"] += 1
            print(f"    [{offset}/{total}] {record.title}", flush=True)

        if start + settings.batch_size < total:
            time.sleep(settings.batch_pause)


def scan(client: GitHubApiClient, settings: Settings) -> ScanResult:
    """Walk every target repository and collect a record per problem directory.

    Rate limit errors abort the scan; other per-repository and
    per-directory failures are logged and skipped.
    """
    result = ScanResult()
    repos = resolve_repositories(client, settings)

    for repo in repos:
        print(f"\nProcessing {repo.full_name}...", flush=True)
        result.stats["repos"] += 1
        try:
            scan_repository(client, settings, repo, result)
        except RateLimitError:
            raise
        except SKIPPABLE_ERRORS as e:
            result.stats["errors"] += 1
            logger.error("Error processing repo %s: %s", repo.full_name, e)

    return result
