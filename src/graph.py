"""NetworkX graph building and structural queries for pedigrees."""

from collections import deque

import networkx as nx

from models import CHILDHUB, PERSON, RELATIONSHIP, PedigreeNode

# Property keys that only ever appear on individuals
PERSON_KEYS = frozenset(
    {
        "phenotipsId",
        "fName",
        "lName",
        "lNameAtB",
        "gender",
        "dob",
        "dod",
        "adoptedStatus",
        "lifeStatus",
        "externalID",
        "family_history",
        "disorders",
        "hpoTerms",
        "carrierStatus",
        "twinGroup",
    }
)

# Property keys that only ever appear on partnerships
RELATIONSHIP_KEYS = frozenset({"consangr", "broken"})

# person -> relationship -> child-hub -> person
NEXT_KIND = {PERSON: RELATIONSHIP, RELATIONSHIP: CHILDHUB, CHILDHUB: PERSON}
PREVIOUS_KIND = {kind: previous for previous, kind in NEXT_KIND.items()}


def build_graph(nodes: list[PedigreeNode], proband_id: int | None = None) -> nx.DiGraph:
    """
    Build a NetworkX directed graph from parsed pedigree nodes.

    Graph nodes are keyed by storage position, so iterating the graph yields
    pedigree nodes in the order they were stored. Node attributes:
    `node_id` (the pedigree id or None), `prop` (the stored properties dict,
    shared with the payload), `kind_hint` (payload "rel"/"chhub" flag) and
    `node_type` (inferred kind).

    Graph attributes:
        index: pedigree id -> position, first occurrence wins
        proband_id: designated proband node id or None
        dangling_edges: (source id, target id) pairs whose target is missing
        duplicate_ids: ids that occur on more than one node
        malformed: positions whose out-edges could not be read
    """
    G = nx.DiGraph()
    index: dict[int, int] = {}
    duplicate_ids: list[int] = []
    malformed: list[int] = []

    for node in nodes:
        G.add_node(
            node.position, node_id=node.id, prop=node.properties, kind_hint=node.kind_hint
        )
        if node.malformed_edges:
            malformed.append(node.position)
        if node.id is None:
            continue
        if node.id in index:
            duplicate_ids.append(node.id)
        else:
            index[node.id] = node.position

    # Sources are visited in storage order, so each node's predecessors
    # are also recorded in storage order
    dangling_edges: list[tuple] = []
    for node in nodes:
        for target in node.out_edges:
            target_position = index.get(target)
            if target_position is None:
                dangling_edges.append((node.id, target))
                continue
            G.add_edge(node.position, target_position)

    G.graph.update(
        index=index,
        proband_id=proband_id,
        dangling_edges=dangling_edges,
        duplicate_ids=duplicate_ids,
        malformed=malformed,
    )
    classify_nodes(G)
    return G


def get_position(G: nx.DiGraph, node_id: int | None) -> int | None:
    """Look up a pedigree node's position by its id."""
    if node_id is None:
        return None
    return G.graph["index"].get(node_id)


def get_producer(G: nx.DiGraph, node_id: int | None) -> int | None:
    """
    Find the node that has an out-edge to `node_id`.

    If several nodes point at it, the first one in storage order wins.
    Returns its position, or None if nothing points at `node_id`.
    """
    position = get_position(G, node_id)
    if position is None:
        return None
    producers = list(G.predecessors(position))
    return min(producers) if producers else None


def is_person_shaped(properties: dict | None) -> bool:
    return bool(properties) and not PERSON_KEYS.isdisjoint(properties)


def is_relationship_shaped(properties: dict | None) -> bool:
    return bool(properties) and not RELATIONSHIP_KEYS.isdisjoint(properties)


def propagate_kinds(G: nx.DiGraph, kinds: dict[int, str], seeds: list[int]):
    """Spread kinds from `seeds` along edges in both directions; existing kinds stick."""
    queue = deque(seeds)
    while queue:
        current = queue.popleft()
        kind = kinds[current]
        for neighbor, neighbor_kind in [
            *((s, NEXT_KIND[kind]) for s in G.successors(current)),
            *((p, PREVIOUS_KIND[kind]) for p in G.predecessors(current)),
        ]:
            if neighbor not in kinds:
                kinds[neighbor] = neighbor_kind
                queue.append(neighbor)


def classify_nodes(G: nx.DiGraph):
    """
    Tag every node with its kind: person, relationship or child-hub.

    Seeds are applied in stages, from strongest to weakest evidence. After
    each stage kinds spread along the person -> relationship -> child-hub ->
    person cycle, and later stages only seed nodes still unreached:
    1. explicit "rel"/"chhub" flags, individual properties (person),
       partnership properties (relationship)
    2. two or more incoming edges (relationship: only partnerships join nodes)
    3. nothing points at the node (person)
    4. the node points at nothing (person)
    Anything left over is a person.
    """
    kinds: dict[int, str] = {}
    for position, data in iter_nodes(G):
        if data["kind_hint"] is not None:
            kinds[position] = data["kind_hint"]
        elif is_person_shaped(data["prop"]):
            kinds[position] = PERSON
        elif is_relationship_shaped(data["prop"]):
            kinds[position] = RELATIONSHIP
    propagate_kinds(G, kinds, sorted(kinds))

    stages = [
        (RELATIONSHIP, lambda n: G.in_degree(n) > 1),
        (PERSON, lambda n: G.in_degree(n) == 0),
        (PERSON, lambda n: G.out_degree(n) == 0),
    ]
    for kind, is_seed in stages:
        seeds = [n for n in G if n not in kinds and is_seed(n)]
        for position in seeds:
            kinds[position] = kind
        propagate_kinds(G, kinds, seeds)

    for position, data in iter_nodes(G):
        data["node_type"] = kinds.get(position, PERSON)


def iter_nodes(G: nx.DiGraph):
    """(position, attributes) for every pedigree node, in storage order."""
    return G.nodes(data=True)


def nodes_of_type(G: nx.DiGraph, node_type: str) -> list[int]:
    """Positions of all nodes of the given kind, in storage order."""
    return [n for n, data in iter_nodes(G) if data.get("node_type") == node_type]
