from dataclasses import asdict, fields, is_dataclass
from typing import List
import xml.etree.ElementTree as ET

import defusedxml.ElementTree as SafeET

ATOM_NS = "http://www.w3.org/2005/Atom"
GS_NS = "http://schemas.google.com/spreadsheets/2006"
GSX_NS = "http://schemas.google.com/spreadsheets/2006/extended"

NAMESPACES = {
    "atom": ATOM_NS,
    "gs": GS_NS,
    "gsx": GSX_NS,
}

class GDataNotFoundError(LookupError):
    """
    A required element or link is not present in the feed document.
    """
    pass

def qname(ns: str, tag: str) -> str:
    """ElementTree's '{namespace}tag' form"""
    return f"{{{NAMESPACES.get(ns, ns)}}}{tag}"

def parse_xml(xml: str|bytes|ET.Element) -> ET.Element:
    """
    Accept either the raw response body or an already parsed element.
    Raw bodies come off the network so go through defusedxml.
    """
    if isinstance(xml, ET.Element):
        return xml
    return SafeET.fromstring(xml)

def child_text(element: ET.Element, tag: str, ns: str = "atom") -> str|None:
    """
    Text of the direct child, '' for an empty element and None
    if the child isn't there at all.
    """
    child = element.find(qname(ns, tag))
    if child is None:
        return None
    return child.text or ""

def find_text(element: ET.Element, tag: str, ns: str = "gs") -> str|None:
    """
    Like child_text() but searching anywhere below element, first match wins.
    """
    for el in element.iter(qname(ns, tag)):
        return el.text or ""
    return None

class GDataResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses provide from_element() to build themselves out of the
    Atom XML, the rest is generic field handling.
    """
    def to_base(self) -> dict:
        """
        Dict representation of the parsed fields.  Call fixup() first
        so anything derived is in its final form.
        """
        self.fixup()
        return asdict(self)

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass

    def update_fields(self, **kwargs) -> List[str]:
        """
        Update fields that may be present, None values are skipped.
        Used when a PUT/POST returns the refreshed entry.
        """
        updated_fields = []
        if is_dataclass(self):
            names = [f.name for f in fields(self)]
            for k,v in kwargs.items():
                if v is not None and k in names:
                    setattr(self, k, v)
                    updated_fields.append(k)
            self.fixup()
        return updated_fields
