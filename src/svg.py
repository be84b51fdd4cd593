"""
String transforms on the pedigree's SVG rendering.

The SVG marks patient linkage with two conventions:
- any element carrying `data-patient-id="<patient id>"` belongs to that
  patient (node shapes, labels)
- elements whose class includes `pedigree-patient-link` are the visible
  link itself and are removed when the patient is unlinked

None of these functions know about the structural pedigree data.

A transform that changes nothing returns its input string as is. Changed
output is re-serialised by ElementTree: comments are kept, but the XML
declaration and any DOCTYPE are dropped.
"""

import xml.etree.ElementTree as ET

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

PATIENT_ATTR = "data-patient-id"
LINK_CLASS = "pedigree-patient-link"
HIGHLIGHT_CLASS = "pedigree-current-patient"

# Keep the SVG's own prefixes when serializing
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)


class AnnotationError(ValueError):
    """Raised when the SVG annotation cannot be parsed."""


def parse_svg(svg: str) -> ET.Element:
    # Comments inside the drawing survive a rewrite
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        return ET.fromstring(svg, parser=parser)
    except ET.ParseError as e:
        raise AnnotationError(f"Cannot parse pedigree SVG: {e}") from e


def to_string(root: ET.Element) -> str:
    return ET.tostring(root, encoding="unicode")


def get_classes(element: ET.Element) -> list[str]:
    return element.get("class", "").split()


def set_classes(element: ET.Element, classes: list[str]):
    if classes:
        element.set("class", " ".join(classes))
    else:
        element.attrib.pop("class", None)


def belongs_to(element: ET.Element, patient_id: str) -> bool:
    """True if the element is marked with `patient_id` (case-insensitive)."""
    value = element.get(PATIENT_ATTR)
    return value is not None and value.lower() == patient_id.lower()


def highlight(svg: str, patient_id: str | None) -> str:
    """
    Mark the elements of `patient_id` as the current patient.

    Any previous highlight is cleared first; a blank patient id only clears.
    """
    if not svg.strip():
        return svg

    root = parse_svg(svg)
    changed = False
    for element in root.iter():
        classes = [c for c in get_classes(element) if c != HIGHLIGHT_CLASS]
        if patient_id and belongs_to(element, patient_id):
            classes.append(HIGHLIGHT_CLASS)
        if classes != get_classes(element):
            set_classes(element, classes)
            changed = True
    return to_string(root) if changed else svg


def resize(svg: str, width: int = 0, height: int = 0) -> str:
    """Set the SVG's width and/or height; non-positive values are left alone."""
    if not svg.strip() or (width <= 0 and height <= 0):
        return svg

    root = parse_svg(svg)
    changed = False
    for name, value in (("width", width), ("height", height)):
        if value > 0 and root.get(name) != str(value):
            root.set(name, str(value))
            changed = True
    return to_string(root) if changed else svg


def remove_link(svg: str, patient_id: str | None) -> str:
    """Remove every visual trace of the link to `patient_id`."""
    if not svg.strip() or not patient_id:
        return svg

    root = parse_svg(svg)
    parents = {child: parent for parent in root.iter() for child in parent}

    links = [
        element
        for element in root.iter()
        if LINK_CLASS in get_classes(element) and belongs_to(element, patient_id)
    ]
    for element in links:
        parent = parents.get(element)
        if parent is not None:
            parent.remove(element)

    marked = [element for element in root.iter() if belongs_to(element, patient_id)]
    for element in marked:
        del element.attrib[PATIENT_ATTR]
        set_classes(element, [c for c in get_classes(element) if c != HIGHLIGHT_CLASS])

    if not links and not marked:
        return svg
    return to_string(root)


def linked_patient_ids(svg: str) -> list[str]:
    """Patient ids referenced anywhere in the SVG, in document order, without repeats."""
    if not svg.strip():
        return []

    root = parse_svg(svg)
    found: list[str] = []
    for element in root.iter():
        value = element.get(PATIENT_ATTR)
        if value and value not in found:
            found.append(value)
    return found
