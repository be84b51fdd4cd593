"""A pedigree: structural JSON data paired with its SVG rendering."""

import json

import networkx as nx
import structlog

import svg
from extraction import (
    annotate_consanguinity,
    extract_linked_individuals,
    extract_linked_patient_ids,
    iter_linked_nodes,
)
from graph import build_graph
from models import ProbandInfo
from parsing import PATIENT_LINK_KEY, is_blank, load_payload, parse_nodes, parse_proband_id
from proband import proband_info
from validation import compare_links, validate_graph

logger = structlog.get_logger(__name__)


class Pedigree:
    """
    Pedigree data and image, kept consistent with each other.

    `data` is the persisted JSON structure and is the only copy of the
    structural state: queries build a fresh graph over it, and mutations
    write into it directly.
    """

    def __init__(self, data: dict | str, image: str = ""):
        """
        Args:
            data: pedigree JSON, as a mapping or JSON text
            image: SVG rendering of the pedigree

        Raises:
            ValueError: if `data` is missing or holds no nodes
        """
        self.data = load_payload(data)
        self.image = image or ""

    @property
    def graph(self) -> nx.DiGraph:
        return build_graph(parse_nodes(self.data), parse_proband_id(self.data))

    def to_json(self) -> str:
        return json.dumps(self.data)

    def get_image(self, highlight_patient_id: str | None, width: int = 0, height: int = 0) -> str:
        """Return the SVG with `highlight_patient_id` marked as the current patient and resized."""
        image = svg.highlight(self.image, highlight_patient_id)
        return svg.resize(image, width, height)

    def extract_patient_properties(self) -> list[dict]:
        return extract_linked_individuals(self.graph)

    def extract_ids(self) -> list[str]:
        return extract_linked_patient_ids(self.graph)

    def annotate_consanguinity(self) -> list[dict]:
        """Store the derived consanguinity flag in the pedigree data itself."""
        return annotate_consanguinity(self.graph)

    @property
    def proband(self) -> ProbandInfo:
        return proband_info(self.graph)

    @property
    def proband_id(self) -> str | None:
        return self.proband.id

    @property
    def proband_last_name(self) -> str | None:
        return self.proband.last_name

    def remove_link(self, patient_id: str | None) -> "Pedigree":
        """
        Unlink a patient from every node of the pedigree and from the image.

        The image is updated first: if it cannot be parsed, the error
        propagates and the data is left as it was. Matching is
        case-insensitive; nodes keep all their other properties. A blank
        or missing id links nothing, so nothing is removed.
        """
        if is_blank(patient_id):
            return self

        self.image = svg.remove_link(self.image, patient_id)

        cleared = 0
        for _, properties in list(iter_linked_nodes(self.graph)):
            if str(properties[PATIENT_LINK_KEY]).lower() == patient_id.lower():
                del properties[PATIENT_LINK_KEY]
                cleared += 1

        logger.info("removed patient link", patient_id=patient_id, nodes_cleared=cleared)
        return self

    def validate(self) -> list[str]:
        """Structural warnings, plus any disagreement between data and image."""
        warnings = validate_graph(self.graph)
        if self.image.strip():
            warnings.extend(compare_links(self.extract_ids(), svg.linked_patient_ids(self.image)))
        return warnings


def remove_patient_link(pedigree: Pedigree, patient_id: str) -> Pedigree:
    return pedigree.remove_link(patient_id)
