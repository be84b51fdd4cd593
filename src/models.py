"""Data classes for pedigree entities."""

from dataclasses import dataclass, field

# Node kinds, inferred from graph structure (not stored in the payload)
PERSON = "person"
RELATIONSHIP = "relationship"
CHILDHUB = "childhub"


@dataclass
class PedigreeNode:
    position: int  # index in the payload's node list
    id: int | None
    properties: dict | None  # same dict object as in the payload
    out_edges: list[int] = field(default_factory=list)
    malformed_edges: bool = False
    kind_hint: str | None = None  # from the payload's "rel"/"chhub" flags


@dataclass
class ProbandInfo:
    id: str | None = None
    last_name: str | None = None
