# domain/entities.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

MemberType = Literal["node", "way", "relation"]


@dataclass(frozen=True)
class Tag:
    key: str
    value: str


@dataclass(frozen=True)
class Meta:
    """Passthrough metadata, copied verbatim onto derived nodes."""

    user: str = ""
    uid: int = 0
    visible: bool = True
    version: int = 0
    changeset: int = 0
    timestamp: datetime | None = None


@dataclass
class Node:
    id: int
    lat: float
    lon: float
    tags: list[Tag] = field(default_factory=list)
    meta: Meta = field(default_factory=Meta)

    def tag_map(self) -> dict[str, str]:
        return {t.key: t.value for t in self.tags}

    def has_tag(self, key: str) -> bool:
        return any(t.key == key for t in self.tags)

    def add_tag(self, key: str, value: str) -> None:
        self.tags.append(Tag(key, value))


@dataclass
class Way:
    id: int
    node_refs: list[int] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    meta: Meta = field(default_factory=Meta)

    def tag_map(self) -> dict[str, str]:
        return {t.key: t.value for t in self.tags}


@dataclass(frozen=True)
class Member:
    type: MemberType
    ref: int
    role: str = ""


@dataclass
class Relation:
    id: int
    members: list[Member] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    meta: Meta = field(default_factory=Meta)


Entity = Node | Way | Relation
