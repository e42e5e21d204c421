import datetime
import xml.etree.ElementTree as ET

from ..resources import GDataNotFoundError, parse_xml
from .resources import (WorksheetEntry, REL_EDIT, REL_LIST_FEED,
                        REL_CELLS_FEED, get_link_href)
from .request import SpreadsheetServiceRequest
from .feeds import ListFeed, CellFeed

class Worksheet():
    """
    A worksheet as listed in a spreadsheet's worksheets feed, the individual
    tabs of the spreadsheet.  This only carries the worksheet metadata, the
    data itself is fetched through the list feed (rows keyed by the header
    row) or the cell feed (individual cells by R/C).
    The entry is parsed once when constructed, everything else is derived
    from that on request.
    request is what the feed retrievals and delete() go through, without
    one only the accessors and URL builders are usable.
    """
    def __init__(self, xml: str|bytes|ET.Element,
                 request: SpreadsheetServiceRequest|None = None) -> None:
        self._entry = WorksheetEntry.from_element(parse_xml(xml))
        self._request = request
        self._post_url = None
        self._edit_cell_post_url = None

    def __str__(self) -> str:
        return str(self._entry)

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def entry(self) -> WorksheetEntry:
        return self._entry

    @property
    def id(self) -> str:
        """
        The worksheet id is the full URL of the entry, empty if the
        entry has none
        """
        return self._entry.id or ""

    @property
    def title(self) -> str:
        return self._entry.title or ""

    @property
    def updated(self) -> datetime.datetime:
        """
        Last update as a timezone aware datetime.
        Raises ValueError if the feed gave us something that isn't ISO 8601.
        """
        return datetime.datetime.fromisoformat(self._required("updated"))

    @property
    def row_count(self) -> int:
        return int(self._required("rowCount"))

    @property
    def col_count(self) -> int:
        return int(self._required("colCount"))

    @property
    def dimensions(self) -> tuple[int,int]:
        return (self.row_count, self.col_count)

    @property
    def edit_url(self) -> str:
        return get_link_href(self._entry.links, REL_EDIT)

    @property
    def post_url(self) -> str|None:
        """
        Set by whoever owns the worksheet for its own later use, not used here.
        """
        return self._post_url

    @post_url.setter
    def post_url(self, url: str|None) -> None:
        self._post_url = url

    @property
    def edit_cell_post_url(self) -> str|None:
        """
        Same as post_url, kept for the cell editing side.
        """
        return self._edit_cell_post_url

    @edit_cell_post_url.setter
    def edit_cell_post_url(self, url: str|None) -> None:
        self._edit_cell_post_url = url

    def setPostUrl(self, url: str|None) -> None:
        self._post_url = url

    def getEditUrl(self) -> str:
        return self.edit_url

    def getListFeedUrl(self, reverse: bool = False,
                       sort: str|None = "column:timestamp",
                       max: int|None = None) -> str:
        """
        URL of the list feed with the query parameters appended, only the
        ones given end up in the query.  sort is 'column:<name>' where name
        is the list feed column key, or an empty value for sheet order.
        """
        url = get_link_href(self._entry.links, REL_LIST_FEED)
        query = []
        if reverse:
            query.append("reverse=true")
        if sort:
            query.append(f"sort={sort}")
        if max is not None:
            query.append(f"max-results={max}")
        if query:
            url += "?" + "&".join(query)
        return url

    def getCellFeedUrl(self, minRow: int|None = None, maxRow: int|None = None,
                       minCol: int|None = None, maxCol: int|None = None) -> str:
        """
        URL of the cell feed limited to the given bounds, 1 based and inclusive.
        Any bound left as None is open.
        """
        url = get_link_href(self._entry.links, REL_CELLS_FEED)
        bounds = (("min-row", minRow), ("max-row", maxRow),
                  ("min-col", minCol), ("max-col", maxCol))
        params = [f"{k}={v}" for k,v in bounds if v is not None]
        if params:
            url += "?" + "&".join(params)
        return url

    def getListFeed(self, reverse: bool = False,
                    sort: str|None = "column:timestamp",
                    max: int|None = None) -> ListFeed:
        """
        https://developers.google.com/sheets/api/v3/data#retrieve_a_list-based_feed
        """
        response = self._service().get(self.getListFeedUrl(reverse, sort, max))
        return ListFeed(response, self._request)

    def getCellFeed(self, minRow: int|None = None, maxRow: int|None = None,
                    minCol: int|None = None, maxCol: int|None = None) -> CellFeed:
        """
        https://developers.google.com/sheets/api/v3/data#retrieve_a_cell-based_feed
        """
        response = self._service().get(self.getCellFeedUrl(minRow, maxRow, minCol, maxCol))
        return CellFeed(response, self._request)

    def delete(self) -> None:
        """
        Remove the worksheet from its spreadsheet.  Not reversible.
        """
        self._service().delete(self.edit_url)

    def _required(self, name: str) -> str:
        value = getattr(self._entry, name)
        if value is None:
            raise GDataNotFoundError(f"Worksheet entry has no {name} element")
        return value

    def _service(self) -> SpreadsheetServiceRequest:
        if self._request is None:
            raise RuntimeError(f"Worksheet {self._entry.title} has no service request to send through")
        return self._request
