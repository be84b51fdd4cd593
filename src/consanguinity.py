"""Consanguinity of an individual's parents, read from the producing relationship."""

import networkx as nx

from graph import get_producer, iter_nodes
from models import PERSON
from parsing import CONSANGUINEOUS, RELATIONSHIP_CONSANGUINITY_KEY


def find_producing_relationship(G: nx.DiGraph, position: int) -> int | None:
    """
    Walk two edges backward from a person to the relationship that produced them.

    person <- child-hub <- relationship. Returns the relationship node's
    position, or None if either hop is missing.
    """
    childhub = get_producer(G, G.nodes[position]["node_id"])
    if childhub is None:
        return None
    return get_producer(G, G.nodes[childhub]["node_id"])


def consanguinity_of(G: nx.DiGraph, position: int) -> bool | None:
    """
    Determine whether the parents of the person at `position` are consanguineous.

    Returns:
        True if the producing relationship is marked "Y", False if it carries
        any other value, None if there is no producing relationship or it has
        no properties.
    """
    relationship = find_producing_relationship(G, position)
    if relationship is None:
        return None

    properties = G.nodes[relationship]["prop"]
    if not properties:
        return None
    return properties.get(RELATIONSHIP_CONSANGUINITY_KEY) == CONSANGUINEOUS


def consanguinity_by_person(G: nx.DiGraph) -> list[tuple[int | None, bool | None]]:
    """(node id, consanguinity) for every person node, in storage order."""
    return [
        (data["node_id"], consanguinity_of(G, position))
        for position, data in iter_nodes(G)
        if data.get("node_type") == PERSON
    ]
