"""Graphviz export of pedigree structure."""

from pathlib import Path

import networkx as nx
import pydot

from graph import iter_nodes
from models import CHILDHUB, PERSON, RELATIONSHIP
from parsing import CONSANGUINEOUS, PATIENT_LINK_KEY, RELATIONSHIP_CONSANGUINITY_KEY


def dot_name(position: int) -> str:
    # Positions are unique even when pedigree ids are not
    return f"n{position}"


def person_label(data: dict) -> str:
    properties = data["prop"] or {}
    name = " ".join(str(properties[k]) for k in ("fName", "lName") if properties.get(k))
    lines = [name or f"#{data['node_id']}"]
    if properties.get(PATIENT_LINK_KEY):
        lines.append(str(properties[PATIENT_LINK_KEY]))
    return "\n".join(lines)


def build_pedigree_dot(G: nx.DiGraph) -> pydot.Dot:
    """
    Build a pydot graph of the pedigree.

    - Persons are boxes coloured by gender, labelled with name and patient id
    - Relationship and child-hub nodes are small points
    - Consanguineous relationships are joined to the partners by double lines
    - The proband is drawn with a thick border
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    proband_id = G.graph.get("proband_id")

    for node, data in iter_nodes(G):
        node_type = data.get("node_type", PERSON)

        if node_type == PERSON:
            gender = (data["prop"] or {}).get("gender")
            if gender == "M":
                fillcolor = "lightblue"
            elif gender == "F":
                fillcolor = "lightpink"
            else:
                fillcolor = "lightgray"

            P.add_node(
                pydot.Node(
                    dot_name(node),
                    label=person_label(data),
                    shape="box",
                    style="rounded,filled",
                    fillcolor=fillcolor,
                    fontsize="10",
                    penwidth="2.5" if data["node_id"] == proband_id else "1",
                )
            )
        else:
            size = "0.1" if node_type == RELATIONSHIP else "0.05"
            P.add_node(pydot.Node(dot_name(node), shape="point", width=size, height=size, label=""))

    for u, v in G.edges():
        target = G.nodes[v]
        target_type = target.get("node_type")

        if target_type == RELATIONSHIP:
            # Partner to relationship: no arrow, doubled when consanguineous
            marked = (target["prop"] or {}).get(RELATIONSHIP_CONSANGUINITY_KEY) == CONSANGUINEOUS
            color = "darkgray:invis:darkgray" if marked else "darkgray"
            P.add_edge(pydot.Edge(dot_name(u), dot_name(v), dir="none", color=color))
        elif target_type == CHILDHUB:
            P.add_edge(pydot.Edge(dot_name(u), dot_name(v), dir="none", color="darkgray"))
        else:
            P.add_edge(pydot.Edge(dot_name(u), dot_name(v), color="darkgray"))

    # Keep partners on the same rank
    for i, relationship in enumerate(
        n for n, d in iter_nodes(G) if d.get("node_type") == RELATIONSHIP
    ):
        partners = sorted(G.predecessors(relationship))
        if len(partners) < 2:
            continue
        sg = pydot.Subgraph(f"couple_{i}", rank="same")
        for partner in partners:
            sg.add_node(pydot.Node(dot_name(partner)))
        P.add_subgraph(sg)

    return P


def plot_pedigree(G: nx.DiGraph, output_path: Path | None = None):
    """
    Render the pedigree with Graphviz.

    Args:
        G: pedigree graph from graph.build_graph
        output_path: file to write (png, svg, pdf or dot). If None, displays interactively.
    """
    P = build_pedigree_dot(G)

    if output_path:
        ext = output_path.suffix.lower().lstrip(".")
        if ext == "dot":
            P.write_raw(str(output_path))
        else:
            if ext not in ("png", "svg", "pdf"):
                ext = "png"
            P.write(str(output_path), format=ext)
        print(f"Pedigree saved to {output_path}")
    else:
        # Save to temporary file and display
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            png_path = Path(f.name)
        try:
            P.write(str(png_path), format="png")
            img = mpimg.imread(png_path)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
        finally:
            png_path.unlink(missing_ok=True)
