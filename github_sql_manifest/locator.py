"""Find the code and description files inside a problem directory."""

from dataclasses import dataclass

from .models import ContentEntry

DEFAULT_CODE_EXTENSION = ".sql"
DEFAULT_DESCRIPTION_NAMES = ("readme.md", "read.me")


@dataclass(frozen=True)
class Artifacts:
    code: ContentEntry | None
    description: ContentEntry | None

    @property
    def found(self) -> bool:
        """A directory only makes it into the manifest when it has a code file."""
        return self.code is not None


def locate_artifacts(
    entries: list[ContentEntry],
    code_extension: str = DEFAULT_CODE_EXTENSION,
    description_names=DEFAULT_DESCRIPTION_NAMES,
) -> Artifacts:
    """Pick the first code file and the first description file of a listing.

    Names are compared lowercased; only plain files with a download URL are
    considered.
    """
    extension = code_extension.lower()
    accepted = {n.lower() for n in description_names}
    files = [e for e in entries if e.is_file and e.download_url]

    code = next((f for f in files if f.name.lower().endswith(extension)), None)
    description = next((f for f in files if f.name.lower() in accepted), None)
    return Artifacts(code=code, description=description)
