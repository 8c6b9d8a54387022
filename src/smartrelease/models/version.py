"""Version component model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class VersionComponents:
    """Components decomposed from a release tag. None means no match."""

    major: str | None = None
    minor: str | None = None
    patch: str | None = None
    pre: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "pre": self.pre,
        }
