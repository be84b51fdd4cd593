"""Tests for plotting.py - DOT export (no Graphviz binary needed)."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.image  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import pydot  # noqa: E402

from plotting import build_pedigree_dot, dot_name, person_label, plot_pedigree  # noqa: E402


def unquote(value) -> str | None:
    return value.strip('"') if isinstance(value, str) else value


def nodes_by_name(P) -> dict:
    return {unquote(n.get_name()): n for n in P.get_nodes()}


def edges_by_pair(P) -> dict:
    return {(unquote(e.get_source()), unquote(e.get_destination())): e for e in P.get_edges()}


def test_person_label():
    data = {"node_id": 4, "prop": {"fName": "Anna", "lName": "Smith", "phenotipsId": "P1"}}

    assert person_label(data) == "Anna Smith\nP1"
    assert person_label({"node_id": 9, "prop": None}) == "#9"


def test_nodes(family_graph):
    nodes = nodes_by_name(build_pedigree_dot(family_graph))

    assert unquote(nodes["n0"].get("shape")) == "box"
    assert unquote(nodes["n0"].get("fillcolor")) == "lightblue"
    assert unquote(nodes["n4"].get("fillcolor")) == "lightpink"
    assert unquote(nodes["n2"].get("shape")) == "point"
    assert unquote(nodes["n3"].get("shape")) == "point"


def test_proband_is_emphasised(family_graph):
    nodes = nodes_by_name(build_pedigree_dot(family_graph))

    assert unquote(nodes["n4"].get("penwidth")) == "2.5"
    assert unquote(nodes["n5"].get("penwidth")) == "1"


def test_consanguineous_relationship_is_doubled(family_graph):
    edges = edges_by_pair(build_pedigree_dot(family_graph))

    assert unquote(edges[("n0", "n2")].get("color")) == "darkgray:invis:darkgray"
    assert unquote(edges[("n2", "n3")].get("color")) == "darkgray"
    assert unquote(edges[("n3", "n4")].get("dir")) is None


def test_partners_share_rank(family_graph):
    P = build_pedigree_dot(family_graph)

    subgraphs = P.get_subgraphs()
    assert len(subgraphs) == 1
    assert {unquote(n.get_name()) for n in subgraphs[0].get_nodes()} == {"n0", "n1"}


def test_dot_source(family_graph):
    source = build_pedigree_dot(family_graph).to_string()

    assert source.startswith("digraph")
    assert dot_name(6) in source


def test_interactive_display_removes_temporary_png(family_graph, monkeypatch):
    written = []

    def fake_write(self, path, prog=None, format="raw", encoding=None):
        Path(path).write_bytes(b"png")
        written.append(Path(path))
        return True

    monkeypatch.setattr(pydot.Dot, "write", fake_write)
    monkeypatch.setattr(matplotlib.image, "imread", lambda path: [[0]])
    monkeypatch.setattr(plt, "show", lambda: None)

    plot_pedigree(family_graph)
    plt.close("all")

    assert len(written) == 1
    assert written[0].suffix == ".png"
    assert not written[0].exists()
