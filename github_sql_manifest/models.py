"""Data models for repositories, directory listings and manifest records."""

from dataclasses import dataclass, field

from .exceptions import MalformedResponseError


def _require(item, key: str, kind: str):
    if not isinstance(item, dict):
        raise MalformedResponseError(f"Expected a JSON object for {kind}, got {type(item).__name__}")
    value = item.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"{kind} is missing required field '{key}'")
    return value


@dataclass(frozen=True)
class RepositoryRef:
    """A repository owned by the scanned user."""

    owner: str
    name: str

    @classmethod
    def from_api(cls, owner: str, item: dict) -> "RepositoryRef":
        return cls(owner=owner, name=_require(item, "name", "repository"))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class ContentEntry:
    """One item of a /contents listing (a file or a directory)."""

    name: str
    type: str
    path: str
    url: str | None = None
    download_url: str | None = None

    @classmethod
    def from_api(cls, item: dict) -> "ContentEntry":
        name = _require(item, "name", "contents entry")
        return cls(
            name=name,
            type=_require(item, "type", "contents entry"),
            path=item.get("path") or name,
            url=item.get("url"),
            download_url=item.get("download_url"),
        )

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @property
    def is_file(self) -> bool:
        return self.type == "file"


@dataclass
class ProblemRecord:
    """One manifest entry describing a problem directory.

    Link manifests fill sql_url/readme_url, content manifests fill
    sql_code/description. to_dict() only emits the fields of its mode.
    """

    platform: str
    title: str
    number: str
    repo: str
    path: str
    folder_name: str
    sql_file_name: str
    sql_url: str | None = None
    readme_url: str | None = None
    sql_code: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)

    def to_dict(self, mode: str) -> dict:
        data = {
            "platform": self.platform,
            "title": self.title,
            "number": self.number,
            "repo": self.repo,
            "path": self.path,
            "folderName": self.folder_name,
            "sqlFileName": self.sql_file_name,
        }
        if mode == "content":
            data["sqlCode"] = self.sql_code
            data["description"] = self.description
        else:
            data["sqlUrl"] = self.sql_url
            data["readmeUrl"] = self.readme_url
        if self.tags:
            data["tags"] = sorted(set(self.tags))
        return data
