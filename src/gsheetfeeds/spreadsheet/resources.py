"""
Typed representations of the entries found in the spreadsheet feeds.
Each is a dataclass filled in once from the Atom <entry> element by
from_element(), so the rest of the package deals in plain fields rather
than querying the XML over and over.
Not every element of the feeds is represented, only what the worksheet,
list and cell feeds need.
"""
from dataclasses import dataclass, field
from typing import List, Self
import xml.etree.ElementTree as ET

from ..resources import (GDataResourceBase, GDataNotFoundError,
                         GSX_NS, qname, child_text, find_text)

REL_EDIT = "edit"
REL_LIST_FEED = "http://schemas.google.com/spreadsheets/2006#listfeed"
REL_CELLS_FEED = "http://schemas.google.com/spreadsheets/2006#cellsfeed"
REL_POST = "http://schemas.google.com/g/2005#post"

@dataclass
class Link(GDataResourceBase):
    """Atom <link rel="..." href="..." type="..."/>"""
    rel: str = field(default="")
    href: str = field(default="")
    type: str = field(default="")

    def __bool__(self) -> bool:
        return bool(self.rel) and bool(self.href)

    @staticmethod
    def from_element(element: ET.Element) -> Self:
        return Link(element.get("rel", ""), element.get("href", ""), element.get("type", ""))

def parse_links(element: ET.Element) -> List[Link]:
    """All the direct <link> children of an entry or feed, skipping any without rel or href"""
    links = [Link.from_element(l) for l in element.findall(qname("atom", "link"))]
    return [l for l in links if l]

def get_link_href(links: List[Link], rel: str) -> str:
    """
    href of the first link whose relation is exactly rel.
    Document order doesn't matter beyond picking the first of duplicates.
    """
    for link in links:
        if link.rel == rel:
            return link.href
    raise GDataNotFoundError(f"No link with rel='{rel}'")

@dataclass
class WorksheetEntry(GDataResourceBase):
    """
    An <entry> of the worksheets feed.
    rowCount/colCount are kept as the raw text so a bad value fails
    when it is asked for rather than when the entry is loaded.
    """
    id: str|None = field(default=None)
    title: str|None = field(default=None)
    updated: str|None = field(default=None)
    rowCount: str|None = field(default=None)
    colCount: str|None = field(default=None)
    links: List[Link|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.links = [l if isinstance(l, Link) else Link(**dict(l)) for l in self.links]

    def __bool__(self) -> bool:
        return bool(self.id)

    def __str__(self) -> str:
        if self:
            return f"{self.title}<{self.id}>"
        return "<empty>"

    @staticmethod
    def from_element(element: ET.Element) -> Self:
        # the counts can sit anywhere in the fragment, not only as direct children
        return WorksheetEntry(id=child_text(element, "id"),
                              title=child_text(element, "title"),
                              updated=child_text(element, "updated"),
                              rowCount=find_text(element, "rowCount"),
                              colCount=find_text(element, "colCount"),
                              links=parse_links(element))

@dataclass
class ListEntry(GDataResourceBase):
    """
    A row of the list feed.  values maps the column name (the header
    of the column, lower cased and stripped by Google) to the cell text,
    in document order.
    """
    id: str|None = field(default=None)
    title: str|None = field(default=None)
    updated: str|None = field(default=None)
    values: dict[str,str] = field(default_factory=dict)
    links: List[Link|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.links = [l if isinstance(l, Link) else Link(**dict(l)) for l in self.links]

    def __bool__(self) -> bool:
        return bool(self.id)

    def __str__(self) -> str:
        return f"{self.title}:{self.values}"

    @staticmethod
    def from_element(element: ET.Element) -> Self:
        values = {}
        prefix = f"{{{GSX_NS}}}"
        for child in element:
            if child.tag.startswith(prefix):
                values[child.tag[len(prefix):]] = child.text or ""
        return ListEntry(id=child_text(element, "id"),
                         title=child_text(element, "title"),
                         updated=child_text(element, "updated"),
                         values=values,
                         links=parse_links(element))

@dataclass
class CellEntry(GDataResourceBase):
    """
    A single cell of the cell feed, row and col are 1 based.
    value is what the sheet displays, inputValue what was typed in
    (a formula for computed cells).
    """
    id: str|None = field(default=None)
    title: str|None = field(default=None)
    row: int = field(default=-1)
    col: int = field(default=-1)
    inputValue: str = field(default="")
    numericValue: float|None = field(default=None)
    value: str = field(default="")
    links: List[Link|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.row = int(self.row)
        self.col = int(self.col)
        if self.numericValue is not None:
            self.numericValue = float(self.numericValue)
        self.links = [l if isinstance(l, Link) else Link(**dict(l)) for l in self.links]

    def __bool__(self) -> bool:
        return self.row > 0 and self.col > 0

    def __str__(self) -> str:
        return f"{self.title}={self.value}"

    @staticmethod
    def from_element(element: ET.Element) -> Self:
        cell = element.find(qname("gs", "cell"))
        if cell is None:
            raise GDataNotFoundError("Cell entry has no gs:cell element")
        return CellEntry(id=child_text(element, "id"),
                         title=child_text(element, "title"),
                         row=cell.get("row", -1),
                         col=cell.get("col", -1),
                         inputValue=cell.get("inputValue", ""),
                         numericValue=cell.get("numericValue", None),
                         value=cell.text or "",
                         links=parse_links(element))
