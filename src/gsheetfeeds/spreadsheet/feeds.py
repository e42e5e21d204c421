"""
The two data views of a worksheet.  The list feed is row oriented,
one entry per row keyed by the header row, the cell feed is one entry
per non-empty cell.  Both are built from the raw response body of the
feed GET.
"""
from typing import List
import xml.etree.ElementTree as ET

from ..resources import parse_xml, qname
from .resources import (ListEntry, CellEntry, Link, REL_EDIT, REL_POST,
                        parse_links, get_link_href)
from .request import SpreadsheetServiceRequest

def _new_entry() -> ET.Element:
    return ET.Element(qname("atom", "entry"))

def _to_xml(entry: ET.Element) -> str:
    # prefixes are generated per document, the feeds only care about the namespaces
    return ET.tostring(entry, encoding="unicode")

def _require(request: SpreadsheetServiceRequest|None) -> SpreadsheetServiceRequest:
    if request is None:
        raise RuntimeError("No service request available for this operation")
    return request

class ListRow():
    """
    A list feed row with the request it came from, so it can be
    written back or deleted.
    """
    def __init__(self, entry: ListEntry,
                 request: SpreadsheetServiceRequest|None = None) -> None:
        self._entry = entry
        self._request = request

    def __str__(self) -> str:
        return str(self._entry)

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __getitem__(self, column: str) -> str:
        return self._entry.values[column]

    @property
    def entry(self) -> ListEntry:
        return self._entry

    @property
    def values(self) -> dict[str,str]:
        return self._entry.values

    @property
    def edit_url(self) -> str:
        return get_link_href(self._entry.links, REL_EDIT)

    def update(self, values: dict[str,str]) -> ListEntry:
        """
        Replace the row.  The list feed PUT is a full replacement, any
        column not in values is cleared, so merge with the current values
        first if that's not what you want.
        """
        xml = _to_xml(ListFeed.row_xml(values, self._entry.id))
        response = _require(self._request).put(self.edit_url, xml)
        updated = ListEntry.from_element(parse_xml(response))
        self._entry.update_fields(**updated.to_base())
        return self._entry

    def delete(self) -> None:
        _require(self._request).delete(self.edit_url)

class ListFeed():
    """
    Worksheet rows as a list of ListRow.
    """
    def __init__(self, xml: str|bytes|ET.Element,
                 request: SpreadsheetServiceRequest|None = None) -> None:
        self._xml = parse_xml(xml)
        self._request = request
        self._links = parse_links(self._xml)
        self._rows = [ListRow(ListEntry.from_element(e), request)
                      for e in self._xml.findall(qname("atom", "entry"))]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def __getitem__(self, index: int) -> ListRow:
        return self._rows[index]

    @property
    def entries(self) -> List[ListRow]:
        return self._rows

    @property
    def links(self) -> List[Link]:
        return self._links

    @property
    def post_url(self) -> str:
        return get_link_href(self._links, REL_POST)

    def to_array(self) -> List[dict[str,str]]:
        return [r.values for r in self._rows]

    @staticmethod
    def row_xml(values: dict[str,str], id: str|None = None) -> ET.Element:
        """
        <entry> with one gsx:column child per value.  Column names are the
        list feed keys, not the header text as displayed.
        """
        entry = _new_entry()
        if id:
            ET.SubElement(entry, qname("atom", "id")).text = id
        for k,v in values.items():
            ET.SubElement(entry, qname("gsx", str(k))).text = "" if v is None else str(v)
        return entry

    def insert(self, row: dict[str,str]) -> ListRow:
        """
        Append a row to the worksheet, returns the created row which is
        also added to this feed.
        """
        xml = _to_xml(self.row_xml(row))
        response = _require(self._request).post(self.post_url, xml)
        created = ListRow(ListEntry.from_element(parse_xml(response)), self._request)
        self._rows.append(created)
        return created

class Cell():
    """
    A cell feed entry with the request it came from.
    """
    def __init__(self, entry: CellEntry,
                 request: SpreadsheetServiceRequest|None = None) -> None:
        self._entry = entry
        self._request = request

    def __str__(self) -> str:
        return str(self._entry)

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def entry(self) -> CellEntry:
        return self._entry

    @property
    def row(self) -> int:
        return self._entry.row

    @property
    def col(self) -> int:
        return self._entry.col

    @property
    def value(self) -> str:
        return self._entry.value

    @property
    def input_value(self) -> str:
        return self._entry.inputValue

    @property
    def edit_url(self) -> str:
        return get_link_href(self._entry.links, REL_EDIT)

    def update(self, value: str) -> CellEntry:
        """
        Set the cell's input value, a leading '=' makes it a formula.
        """
        xml = _to_xml(CellFeed.cell_xml(self.row, self.col, value, self._entry.id))
        response = _require(self._request).put(self.edit_url, xml)
        updated = CellEntry.from_element(parse_xml(response))
        self._entry.update_fields(**updated.to_base())
        return self._entry

class CellFeed():
    """
    Worksheet cells, only the non-empty ones are returned by the feed
    unless return-empty was asked for.
    """
    def __init__(self, xml: str|bytes|ET.Element,
                 request: SpreadsheetServiceRequest|None = None) -> None:
        self._xml = parse_xml(xml)
        self._request = request
        self._links = parse_links(self._xml)
        self._cells = [Cell(CellEntry.from_element(e), request)
                       for e in self._xml.findall(qname("atom", "entry"))]

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells)

    @property
    def entries(self) -> List[Cell]:
        return self._cells

    @property
    def links(self) -> List[Link]:
        return self._links

    @property
    def post_url(self) -> str:
        return get_link_href(self._links, REL_POST)

    def getCell(self, row: int, col: int) -> Cell|None:
        for c in self._cells:
            if c.row == row and c.col == col:
                return c
        return None

    def to_array(self) -> dict[int,dict[int,str]]:
        """
        {row: {col: value}} of the displayed values
        """
        result = {}
        for c in self._cells:
            result.setdefault(c.row, {})[c.col] = c.value
        return result

    @staticmethod
    def cell_xml(row: int, col: int, value: str, id: str|None = None) -> ET.Element:
        entry = _new_entry()
        if id:
            ET.SubElement(entry, qname("atom", "id")).text = id
        ET.SubElement(entry, qname("gs", "cell"),
                      {"row": str(int(row)), "col": str(int(col)), "inputValue": str(value)})
        return entry

    def editCell(self, row: int, col: int, value: str) -> Cell:
        """
        Write value into the cell at row/col, 1 based.  The cell doesn't need
        to be in this feed.
        """
        if row < 1 or col < 1:
            raise ValueError(f"editCell(): row and col are 1 based, got R{row}C{col}")
        xml = _to_xml(self.cell_xml(row, col, value))
        response = _require(self._request).post(self.post_url, xml)
        cell = Cell(CellEntry.from_element(parse_xml(response)), self._request)
        existing = self.getCell(cell.row, cell.col)
        if existing is not None:
            self._cells[self._cells.index(existing)] = cell
        else:
            self._cells.append(cell)
        return cell
