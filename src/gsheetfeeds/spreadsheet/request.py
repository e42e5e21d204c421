"""
The HTTP side of the feeds.  Everything is addressed by the full URL
taken from the links in the feed documents so this is just a thin
layer over a requests session adding the GData headers.
"""
import logging

import requests

from ..access import gdata

logger = logging.getLogger(__name__)

ATOM_CONTENT_TYPE = "application/atom+xml"

class SpreadsheetServiceRequest():
    """
    Send requests to the spreadsheet feeds.
    session is any requests.Session compatible object.  If not given
    the authorized session from the access singleton is used, which
    will connect on first use.
    Errors are not handled here, a failed request raises requests.HTTPError
    and anything from the transport or auth layers propagates as is.
    """
    DEFAULT_HEADERS = {"GData-Version": "3.0"}

    def __init__(self, session: requests.Session|None = None,
                 headers: dict[str,str]|None = None) -> None:
        self._session = session
        self._headers = dict(self.DEFAULT_HEADERS)
        if headers:
            self._headers.update(headers)

    def __repr__(self) -> str:
        return f"{self.__class__}:{self._headers}"

    @property
    def headers(self) -> dict[str,str]:
        return self._headers

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = gdata.get_session()
            if self._session is None:
                raise RuntimeError("Unable to establish an authorized session, check gdata.config")
        return self._session

    def get(self, url: str) -> str:
        return self._execute("GET", url)

    def post(self, url: str, body: str|bytes) -> str:
        return self._execute("POST", url, body)

    def put(self, url: str, body: str|bytes) -> str:
        # unconditional, we don't track etags
        return self._execute("PUT", url, body, {"If-Match": "*"})

    def delete(self, url: str) -> str:
        return self._execute("DELETE", url, extra_headers={"If-Match": "*"})

    def _execute(self, method: str, url: str,
                 body: str|bytes|None = None,
                 extra_headers: dict[str,str]|None = None) -> str:
        if not url:
            raise ValueError(f"{method} request needs a URL")
        headers = dict(self._headers)
        if body is not None:
            headers["Content-Type"] = ATOM_CONTENT_TYPE
            if isinstance(body, str):
                body = body.encode("utf-8")
        if extra_headers:
            headers.update(extra_headers)
        logger.debug("%s %s", method, url)
        response = self.session.request(method, url, data=body, headers=headers)
        response.raise_for_status()
        return response.text
