"""Enumeration of pedigree individuals linked to patient records."""

from collections.abc import Iterator
import copy

import networkx as nx
import structlog

from consanguinity import consanguinity_of
from graph import iter_nodes
from parsing import (
    ADOPTED_IN,
    ADOPTED_KEY,
    CONSANGUINITY_KEY,
    FAMILY_HISTORY_KEY,
    PATIENT_LINK_KEY,
    is_blank,
)

logger = structlog.get_logger(__name__)


def iter_linked_nodes(G: nx.DiGraph) -> Iterator[tuple[int, dict]]:
    """Yield (position, properties) for every node with a patient link, in storage order."""
    for position, data in iter_nodes(G):
        properties = data["prop"]
        if not properties:
            continue
        if is_blank(properties.get(PATIENT_LINK_KEY)):
            continue
        yield position, properties


def set_consanguinity(properties: dict, consanguinity: bool | None):
    """Write the consanguinity flag into family_history, keeping its other keys."""
    family_history = properties.get(FAMILY_HISTORY_KEY)
    if isinstance(family_history, dict):
        family_history[CONSANGUINITY_KEY] = consanguinity
    else:
        properties[FAMILY_HISTORY_KEY] = {CONSANGUINITY_KEY: consanguinity}


def with_consanguinity(G: nx.DiGraph, position: int, properties: dict) -> dict:
    # Adopted-in individuals are not related by blood to the receiving family
    if properties.get(ADOPTED_KEY) != ADOPTED_IN:
        set_consanguinity(properties, consanguinity_of(G, position))
    return properties


def extract_linked_individuals(G: nx.DiGraph) -> list[dict]:
    """
    Collect the properties of every individual linked to a patient record.

    Each result is a copy of the stored properties with
    family_history.consanguinity filled in (None when unknown), except for
    adopted-in individuals which are returned untouched. The pedigree
    itself is not modified; see annotate_consanguinity for that.
    """
    return [
        with_consanguinity(G, position, copy.deepcopy(properties))
        for position, properties in iter_linked_nodes(G)
    ]


def extract_linked_patient_ids(G: nx.DiGraph) -> list[str]:
    """Patient identifiers of all linked individuals, in storage order."""
    return [str(properties[PATIENT_LINK_KEY]) for _, properties in iter_linked_nodes(G)]


def annotate_consanguinity(G: nx.DiGraph) -> list[dict]:
    """
    Store the consanguinity flag on every linked individual in place.

    Returns the stored properties dicts that were visited.
    """
    annotated = [
        with_consanguinity(G, position, properties)
        for position, properties in iter_linked_nodes(G)
    ]
    logger.debug("annotated consanguinity", individuals=len(annotated))
    return annotated
