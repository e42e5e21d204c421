"""
Classes to work with the Google Spreadsheets list and cell feeds
"""

from .resources import WorksheetEntry, ListEntry, CellEntry, Link, get_link_href
from .request import SpreadsheetServiceRequest
from .feeds import ListFeed, ListRow, CellFeed, Cell
from .worksheet import Worksheet
