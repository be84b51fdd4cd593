"""Shared pedigree fixtures."""

import pytest

from graph import build_graph
from parsing import parse_nodes, parse_proband_id


def make_family() -> dict:
    """
    Two partners (0, 1) in a consanguineous relationship (2) with a
    child-hub (3) producing a linked daughter (4) and an adopted-in linked
    son (5). Node 6 is a linked founder with no parents in the pedigree.
    """
    return {
        "GG": [
            {"id": 0, "prop": {"gender": "M", "fName": "John", "lName": "Smith"}, "outedges": [{"to": 2}]},
            {"id": 1, "prop": {"gender": "F", "fName": "Mary", "lName": "Smith"}, "outedges": [{"to": 2}]},
            {"id": 2, "prop": {"consangr": "Y"}, "outedges": [{"to": 3}]},
            {"id": 3, "outedges": [{"to": 4}, {"to": 5}]},
            {
                "id": 4,
                "prop": {"gender": "F", "fName": "Anna", "lName": "Smith", "phenotipsId": "P0000001"},
            },
            {
                "id": 5,
                "prop": {
                    "gender": "M",
                    "lName": "Smith",
                    "phenotipsId": "P0000002",
                    "adoptedStatus": "adoptedIn",
                    "family_history": {"notes": "adopted at birth"},
                },
            },
            {
                "id": 6,
                "prop": {
                    "gender": "F",
                    "lName": "Jones",
                    "phenotipsId": "P0000003",
                    "family_history": {"consanguinity": True, "notes": "keep"},
                },
            },
        ],
        "probandNodeID": 4,
    }


FAMILY_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
    'width="800" height="600">'
    '<g class="pedigree-node" data-patient-id="P0000001">'
    '<rect class="pedigree-node-shape" data-patient-id="P0000001" x="10" y="10" width="40" height="40" />'
    '<a class="pedigree-patient-link" data-patient-id="P0000001" xlink:href="/patients/P0000001">'
    "<text>P0000001</text></a>"
    "</g>"
    '<g class="pedigree-node" data-patient-id="P0000002">'
    '<a class="pedigree-patient-link" data-patient-id="P0000002" xlink:href="/patients/P0000002">'
    "<text>P0000002</text></a>"
    "</g>"
    '<g class="pedigree-node" data-patient-id="P0000003">'
    '<a class="pedigree-patient-link" data-patient-id="P0000003" xlink:href="/patients/P0000003">'
    "<text>P0000003</text></a>"
    "</g>"
    "</svg>"
)


def graph_of(payload: dict):
    return build_graph(parse_nodes(payload), parse_proband_id(payload))


@pytest.fixture
def family() -> dict:
    return make_family()


@pytest.fixture
def family_graph(family):
    return graph_of(family)


@pytest.fixture
def family_svg() -> str:
    return FAMILY_SVG


@pytest.fixture
def graph_from():
    """Build a pedigree graph from a raw payload."""
    return graph_of
