"""Resolution of the pedigree's proband."""

import networkx as nx

from graph import iter_nodes
from models import ProbandInfo
from parsing import LAST_NAME_KEY, PATIENT_LINK_KEY, is_blank


def proband_info(G: nx.DiGraph) -> ProbandInfo:
    """
    Resolve the proband's patient identifier and last name.

    The search stops at the first node carrying the proband id, even when
    that node has no usable patient link. Anything unresolvable yields
    None fields; this never raises.
    """
    proband_id = G.graph.get("proband_id")
    if proband_id is None:
        return ProbandInfo()

    for _, data in iter_nodes(G):
        if data["node_id"] != proband_id:
            continue

        properties = data["prop"]
        if properties is None or is_blank(properties.get(PATIENT_LINK_KEY)):
            return ProbandInfo()

        last_name = properties.get(LAST_NAME_KEY)
        return ProbandInfo(
            id=str(properties[PATIENT_LINK_KEY]),
            last_name=None if is_blank(last_name) else str(last_name),
        )

    return ProbandInfo()


def proband_id(G: nx.DiGraph) -> str | None:
    return proband_info(G).id


def proband_last_name(G: nx.DiGraph) -> str | None:
    return proband_info(G).last_name
