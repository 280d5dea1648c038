"""Build a static JSON manifest of SQL practice problems from GitHub repositories.

Scans a user's repositories for directories holding a .sql solution (and,
optionally, a README) and writes one record per directory, either with
download links or with the file contents embedded.
"""

from .cli import main
from .client import GitHubApiClient
from .manifest import Manifest, build_manifest, write_manifest
from .models import ContentEntry, ProblemRecord, RepositoryRef
from .pipeline import scan
from .settings import Settings, load_settings

__all__ = [
    "main",
    "GitHubApiClient",
    "Manifest",
    "build_manifest",
    "write_manifest",
    "ContentEntry",
    "ProblemRecord",
    "RepositoryRef",
    "scan",
    "Settings",
    "load_settings",
]

if __name__ == "__main__":
    main()
