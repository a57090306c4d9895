import re
from enum import Enum
from typing import Dict, NamedTuple, Optional


class ResourceType(str, Enum):
    """Resource namespaces of the Docker API that carry tenant ownership."""
    CONTAINER = "container"
    NETWORK = "network"
    VOLUME = "volume"
    IMAGE = "image"
    EXEC = "exec"


class FamilyMatch(NamedTuple):
    """
    Submatches of a resource-family pattern.

    Exactly one of the two shapes is populated:
      - ``family/{id}/{subaction}``: ``item`` and ``subaction``
      - ``family/{id}``: ``bare`` only
    Unpopulated groups are empty strings.
    """
    item: str
    subaction: str
    bare: str

    @property
    def has_subaction(self) -> bool:
        return self.subaction != ""

    @property
    def has_bare(self) -> bool:
        return self.bare != ""


class GenericMatch(NamedTuple):
    """Submatches of the two-segment fallback pattern ``/{head}/{tail}``."""
    head: str
    tail: str


def _family_pattern(family: str) -> "re.Pattern[str]":
    return re.compile(rf"/{family}/(.*)/(.*)|/{family}/(\w+)")


FAMILY_PATTERNS: Dict[ResourceType, "re.Pattern[str]"] = {
    ResourceType.CONTAINER: _family_pattern("containers"),
    ResourceType.NETWORK: _family_pattern("networks"),
    ResourceType.VOLUME: _family_pattern("volumes"),
    ResourceType.IMAGE: _family_pattern("images"),
}

GENERIC_PATTERN = re.compile(r"/(.*)/(.*)")


def match_family(family: ResourceType, path: str) -> Optional[FamilyMatch]:
    """Match ``path`` against one family pattern; ``None`` rules the family out."""
    pattern = FAMILY_PATTERNS.get(family)
    if pattern is None:
        return None
    m = pattern.search(path)
    if m is None:
        return None
    return FamilyMatch(*m.groups(default=""))


def match_generic(path: str) -> Optional[GenericMatch]:
    m = GENERIC_PATTERN.search(path)
    if m is None:
        return None
    return GenericMatch(*m.groups(default=""))


class PathMatches(NamedTuple):
    """Every pattern evaluated once against a single request path."""
    container: Optional[FamilyMatch]
    network: Optional[FamilyMatch]
    volume: Optional[FamilyMatch]
    image: Optional[FamilyMatch]
    generic: Optional[GenericMatch]

    @classmethod
    def of(cls, path: str) -> "PathMatches":
        return cls(
            container=match_family(ResourceType.CONTAINER, path),
            network=match_family(ResourceType.NETWORK, path),
            volume=match_family(ResourceType.VOLUME, path),
            image=match_family(ResourceType.IMAGE, path),
            generic=match_generic(path),
        )
