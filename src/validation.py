"""Structural validation for pedigree graphs."""

import networkx as nx

from graph import iter_nodes
from models import CHILDHUB, PERSON


def validate_graph(G: nx.DiGraph) -> list[str]:
    """
    Validate the pedigree graph for:
    - Duplicate node ids
    - Unreadable out-edges
    - Edges pointing at nodes that do not exist
    - A proband id that matches no node
    - Cycles in the edge structure
    - Child-hubs or persons produced by more than one node

    None of these stop the derived-attribute queries from running; they
    only make their results less trustworthy. Returns a list of warning
    messages.
    """
    warnings: list[str] = []

    for node_id in G.graph.get("duplicate_ids", []):
        warnings.append(f"Duplicate node id {node_id}: only the first node is reachable")

    for position in G.graph.get("malformed", []):
        warnings.append(
            f"Node {G.nodes[position]['node_id']} (position {position}) has unreadable "
            f"out-edges; they were ignored"
        )

    for source, target in G.graph.get("dangling_edges", []):
        warnings.append(f"Node {source} has an edge to missing node {target}")

    proband_id = G.graph.get("proband_id")
    if proband_id is not None and proband_id not in G.graph["index"]:
        warnings.append(f"Proband node {proband_id} does not exist")

    try:
        cycle = nx.find_cycle(G, orientation="original")
        cycle_nodes = [G.nodes[edge[0]]["node_id"] for edge in cycle]
        warnings.append(f"Cycle detected in pedigree structure: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Consanguinity lookups pick the first producer in storage order
    for position, data in iter_nodes(G):
        if data.get("node_type") not in (CHILDHUB, PERSON):
            continue
        producers = sorted(G.predecessors(position))
        if len(producers) > 1:
            producer_ids = [G.nodes[p]["node_id"] for p in producers]
            warnings.append(
                f"{data['node_type'].capitalize()} node {data['node_id']} is produced by "
                f"several nodes {producer_ids}; using {producer_ids[0]}"
            )

    return warnings


def compare_links(structural_ids: list[str], annotation_ids: list[str]) -> list[str]:
    """Report patient ids linked in only one of the structure and the SVG (case-insensitive)."""
    structural = {i.lower(): i for i in structural_ids}
    annotation = {i.lower(): i for i in annotation_ids}

    warnings: list[str] = []
    for key in structural.keys() - annotation.keys():
        warnings.append(f"Patient {structural[key]} is linked in the data but not in the image")
    for key in annotation.keys() - structural.keys():
        warnings.append(f"Patient {annotation[key]} is linked in the image but not in the data")
    return sorted(warnings)
