"""CLI commands for building the SQL problem manifest."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import SettingsError

from .exceptions import ConfigurationError, ManifestError, RateLimitError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a JSON manifest of SQL problems from GitHub repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Scan repositories and write the manifest",
    )
    build_parser.add_argument("--owner", default=None, help="GitHub user to scan (env: MANIFEST_OWNER)")
    build_parser.add_argument(
        "--repo",
        dest="repository",
        default=None,
        help="Scan only this repository instead of all matching ones",
    )
    build_parser.add_argument(
        "--path",
        dest="root_path",
        default=None,
        help="Directory inside the repository holding the problems (default: repository root)",
    )
    build_parser.add_argument(
        "--mode",
        choices=["links", "content"],
        default=None,
        help="Store download links or embed file contents (default: content)",
    )
    build_parser.add_argument(
        "--title-style",
        choices=["folder", "title"],
        default=None,
        help="How folder names become titles (default: folder for links, title for content)",
    )
    build_parser.add_argument(
        "--sort-by",
        choices=["platform", "title"],
        default=None,
        help="Sort records by platform then title, or by title (default: platform)",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file (default: problems.json)",
    )
    build_parser.add_argument(
        "--records-key",
        default=None,
        help="Key holding the record list in the manifest (default: problems)",
    )
    build_parser.add_argument(
        "--platform",
        default=None,
        help="Platform label when none can be read from the repository name",
    )
    build_parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=None,
        help="Tag added to every record (repeatable)",
    )
    build_parser.add_argument(
        "--delay",
        dest="request_delay",
        type=float,
        default=None,
        help="Seconds to wait between directory listings (default: 0.1)",
    )
    build_parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Directories per batch (default: 10)",
    )
    build_parser.add_argument(
        "--batch-pause",
        type=float,
        default=None,
        help="Seconds to pause after each batch (default: 0.5)",
    )
    build_parser.add_argument(
        "--allow-anonymous",
        action="store_true",
        help="Run without GITHUB_TOKEN (much lower rate limits)",
    )

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make a single GitHub API GET call and print the JSON",
    )
    api_parser.add_argument(
        "endpoint",
        help="API endpoint path (e.g., repos/owner/repo/contents/path)",
    )
    api_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter (repeatable, e.g., --param per_page=100)",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _fail(message: str) -> None:
    print(f"\nError: {message}", file=sys.stderr)
    sys.exit(1)


def _run_build(args) -> None:
    from .client import GitHubApiClient
    from .manifest import build_manifest, write_manifest
    from .pipeline import scan
    from .settings import load_settings, validate_settings

    overrides = {
        "owner": args.owner,
        "repository": args.repository,
        "root_path": args.root_path,
        "mode": args.mode,
        "title_style": args.title_style,
        "sort_by": args.sort_by,
        "output": args.output,
        "records_key": args.records_key,
        "platform": args.platform,
        "tags": args.tags,
        "request_delay": args.request_delay,
        "batch_size": args.batch_size,
        "batch_pause": args.batch_pause,
    }
    if args.allow_anonymous:
        overrides["require_token"] = False

    try:
        settings = load_settings(**overrides)
        validate_settings(settings)
    except (ConfigurationError, SettingsError, ValidationError) as e:
        _fail(str(e))

    if not settings.github_token:
        logging.getLogger(__name__).warning("No GitHub token provided, rate limits will be strict")

    client = GitHubApiClient(settings)
    try:
        result = scan(client, settings)
        manifest = build_manifest(
            result.records,
            mode=settings.mode,
            sort_by=settings.sort_by,
            records_key=settings.records_key,
        )
        output = Path(settings.output)
        size = write_manifest(manifest, output)
    except RateLimitError as e:
        _fail(f"{e}. Try again after {e.reset_time}.")
    except ManifestError as e:
        _fail(str(e))
    finally:
        client.close()

    stats = result.stats
    print(f"\nGenerated {output} with {manifest.count} {settings.records_key} ({size:,} bytes, {client.calls} API calls)")
    print(f"Platforms: {', '.join(manifest.platforms)}")
    print(f"Done: {stats['directories']} directories scanned, {stats['skipped']} skipped, {stats['errors']} errors")


def _run_api(args) -> None:
    from .client import GitHubApiClient
    from .settings import load_settings

    params = {}
    for p in args.param:
        k, _, v = p.partition("=")
        params[k] = v

    client = GitHubApiClient(load_settings())
    try:
        body = client.get(args.endpoint, params=params or None)
    except ManifestError as e:
        _fail(str(e))
    finally:
        client.close()

    json.dump(body, sys.stdout, indent=2)
    sys.stdout.write("\n")


def main():
    parser = _build_parser()
    args = parser.parse_args()
    _configure_logging(args.verbose)

    try:
        if args.command == "build":
            _run_build(args)
        elif args.command == "api":
            _run_api(args)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        _fail("Interrupted")
    except Exception as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
