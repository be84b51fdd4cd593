"""Tests for validation.py."""

from validation import compare_links, validate_graph


def test_clean_family(family_graph):
    assert validate_graph(family_graph) == []


def test_structural_problems(graph_from):
    G = graph_from(
        {
            "GG": [
                {"id": 1, "outedges": [{"to": 99}]},
                {"id": 1},
                {"id": 2, "outedges": [{"oops": 3}]},
            ],
            "probandNodeID": 7,
        }
    )

    assert validate_graph(G) == [
        "Duplicate node id 1: only the first node is reachable",
        "Node 2 (position 2) has unreadable out-edges; they were ignored",
        "Node 1 has an edge to missing node 99",
        "Proband node 7 does not exist",
    ]


def test_cycle(graph_from):
    G = graph_from({"GG": [{"id": 1, "outedges": [{"to": 2}]}, {"id": 2, "outedges": [{"to": 1}]}]})

    warnings = validate_graph(G)

    assert any(w.startswith("Cycle detected in pedigree structure") for w in warnings)


def test_childhub_with_two_relationships(graph_from):
    G = graph_from(
        {
            "GG": [
                {"id": 5, "prop": {"phenotipsId": "P5"}},
                {"id": 10, "outedges": [{"to": 5}]},
                {"id": 21, "outedges": [{"to": 10}], "prop": {"consangr": "N"}},
                {"id": 20, "outedges": [{"to": 10}], "prop": {"consangr": "Y"}},
            ]
        }
    )

    assert validate_graph(G) == ["Childhub node 10 is produced by several nodes [21, 20]; using 21"]


def test_compare_links():
    assert compare_links(["P1", "p2"], ["P2", "P3"]) == [
        "Patient P1 is linked in the data but not in the image",
        "Patient P3 is linked in the image but not in the data",
    ]


def test_compare_links_agree():
    assert compare_links(["P1"], ["p1"]) == []


def test_childless_relationship(graph_from):
    G = graph_from(
        {
            "GG": [
                {"id": 1, "outedges": [{"to": 3}]},
                {"id": 2, "outedges": [{"to": 3}]},
                {"id": 3},
            ]
        }
    )

    assert validate_graph(G) == []
