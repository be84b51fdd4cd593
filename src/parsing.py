"""Pedigree payload parsing: the persisted JSON shape and node extraction."""

import json
from pathlib import Path

import structlog

from models import CHILDHUB, RELATIONSHIP, PedigreeNode

logger = structlog.get_logger(__name__)

# Keys of the persisted pedigree JSON. The payload is written back as-is,
# so these must match the stored documents exactly.
DATA_KEY = "GG"
PROBAND_KEY = "probandNodeID"
ID_KEY = "id"
PROP_KEY = "prop"
OUTEDGES_KEY = "outedges"
EDGE_TARGET_KEY = "to"
RELATIONSHIP_FLAG_KEY = "rel"
CHILDHUB_FLAG_KEY = "chhub"

PATIENT_LINK_KEY = "phenotipsId"
LAST_NAME_KEY = "lName"
ADOPTED_KEY = "adoptedStatus"
FAMILY_HISTORY_KEY = "family_history"
CONSANGUINITY_KEY = "consanguinity"
RELATIONSHIP_CONSANGUINITY_KEY = "consangr"

ADOPTED_IN = "adoptedIn"
CONSANGUINEOUS = "Y"


def coerce_int(value) -> int | None:
    """
    Read an integer the way a lenient JSON reader would.

    Accepts ints, integral floats and numeric strings; anything else
    (including booleans) yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def is_blank(value) -> bool:
    """True for None and for values whose string form is empty or whitespace."""
    return value is None or not str(value).strip()


def load_payload(data: dict | str | None) -> dict:
    """
    Validate a structural payload and return it as a dict.

    The payload may be given as a mapping or as its JSON text. It must hold
    at least one node under the "GG" key.

    Raises:
        ValueError: if the payload is missing, empty, or has no nodes
    """
    if data is None:
        raise ValueError("Pedigree data is required")
    if isinstance(data, str):
        if not data.strip():
            raise ValueError("Pedigree data is required")
        data = json.loads(data)
    if not isinstance(data, dict) or not data:
        raise ValueError("Pedigree data must be a non-empty JSON object")

    nodes = data.get(DATA_KEY)
    if not isinstance(nodes, list) or not nodes:
        raise ValueError(f"Pedigree data has no nodes under '{DATA_KEY}'")
    return data


def parse_out_edges(raw_edges) -> tuple[list[int], bool]:
    """
    Extract target ids from a node's "outedges" array.

    Returns (targets, malformed). A node with any unreadable edge is
    treated as having no edges at all.
    """
    if raw_edges is None:
        return ([], False)
    if not isinstance(raw_edges, list):
        return ([], True)

    targets = []
    for edge in raw_edges:
        target = coerce_int(edge.get(EDGE_TARGET_KEY)) if isinstance(edge, dict) else None
        if target is None:
            return ([], True)
        targets.append(target)
    return (targets, False)


def parse_node(position: int, raw) -> PedigreeNode | None:
    """Convert one entry of the "GG" array into a PedigreeNode, or None if unusable."""
    if not isinstance(raw, dict):
        logger.warning("skipping non-object pedigree node", position=position)
        return None

    properties = raw.get(PROP_KEY)
    if not isinstance(properties, dict):
        properties = None

    out_edges, malformed = parse_out_edges(raw.get(OUTEDGES_KEY))
    node_id = coerce_int(raw.get(ID_KEY))
    if malformed:
        logger.warning("ignoring malformed out-edges", position=position, node_id=node_id)

    kind_hint = None
    if raw.get(RELATIONSHIP_FLAG_KEY) is True:
        kind_hint = RELATIONSHIP
    elif raw.get(CHILDHUB_FLAG_KEY) is True:
        kind_hint = CHILDHUB

    return PedigreeNode(
        position=position,
        id=node_id,
        properties=properties,
        out_edges=out_edges,
        malformed_edges=malformed,
        kind_hint=kind_hint,
    )


def parse_nodes(payload: dict) -> list[PedigreeNode]:
    """Parse all pedigree nodes, preserving their storage order."""
    raw_nodes = payload.get(DATA_KEY)
    if not isinstance(raw_nodes, list):
        return []

    nodes: list[PedigreeNode] = []
    for position, raw in enumerate(raw_nodes):
        node = parse_node(position, raw)
        if node is not None:
            nodes.append(node)
    return nodes


def parse_proband_id(payload: dict) -> int | None:
    """Return the proband's node id, or None if none is designated."""
    return coerce_int(payload.get(PROBAND_KEY))


def load_pedigree_file(path: Path) -> dict:
    """Read a pedigree JSON document from disk."""
    return load_payload(path.read_text(encoding="utf-8"))


def save_pedigree_file(path: Path, payload: dict):
    """Write a pedigree JSON document to disk, preserving key order."""
    path.write_text(json.dumps(payload), encoding="utf-8")
