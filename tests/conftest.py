import pytest

WORKSHEET_ENTRY = """<?xml version="1.0" encoding="UTF-8"?>
<entry xmlns="http://www.w3.org/2005/Atom"
       xmlns:gs="http://schemas.google.com/spreadsheets/2006">
  <id>https://spreadsheets.google.com/feeds/worksheets/key/private/full/od6</id>
  <updated>2013-02-10T12:37:53.456Z</updated>
  <category scheme="http://schemas.google.com/spreadsheets/2006" term="http://schemas.google.com/spreadsheets/2006#worksheet"/>
  <title type="text">Sheet1</title>
  <content type="text">Sheet1</content>
  <link rel="http://schemas.google.com/spreadsheets/2006#listfeed" type="application/atom+xml"
        href="https://spreadsheets.google.com/feeds/list/key/od6/private/full"/>
  <link rel="http://schemas.google.com/spreadsheets/2006#cellsfeed" type="application/atom+xml"
        href="https://spreadsheets.google.com/feeds/cells/key/od6/private/full"/>
  <link rel="self" type="application/atom+xml"
        href="https://spreadsheets.google.com/feeds/worksheets/key/private/full/od6"/>
  <link rel="edit" type="application/atom+xml"
        href="https://spreadsheets.google.com/feeds/worksheets/key/private/full/od6/version"/>
  <gs:rowCount>10</gs:rowCount>
  <gs:colCount>5</gs:colCount>
</entry>
"""

LIST_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:gsx="http://schemas.google.com/spreadsheets/2006/extended">
  <id>https://spreadsheets.google.com/feeds/list/key/od6/private/full</id>
  <title type="text">Sheet1</title>
  <link rel="http://schemas.google.com/g/2005#post" type="application/atom+xml"
        href="https://spreadsheets.google.com/feeds/list/key/od6/private/full"/>
  <entry>
    <id>https://spreadsheets.google.com/feeds/list/key/od6/private/full/row1</id>
    <updated>2013-02-10T12:37:53.456Z</updated>
    <title type="text">Alice</title>
    <link rel="edit" type="application/atom+xml"
          href="https://spreadsheets.google.com/feeds/list/key/od6/private/full/row1/v1"/>
    <gsx:name>Alice</gsx:name>
    <gsx:age>30</gsx:age>
  </entry>
  <entry>
    <id>https://spreadsheets.google.com/feeds/list/key/od6/private/full/row2</id>
    <updated>2013-02-10T12:37:53.456Z</updated>
    <title type="text">Bob</title>
    <link rel="edit" type="application/atom+xml"
          href="https://spreadsheets.google.com/feeds/list/key/od6/private/full/row2/v1"/>
    <gsx:name>Bob</gsx:name>
    <gsx:age></gsx:age>
  </entry>
</feed>
"""

CELL_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom"
      xmlns:gs="http://schemas.google.com/spreadsheets/2006">
  <id>https://spreadsheets.google.com/feeds/cells/key/od6/private/full</id>
  <title type="text">Sheet1</title>
  <link rel="http://schemas.google.com/g/2005#post" type="application/atom+xml"
        href="https://spreadsheets.google.com/feeds/cells/key/od6/private/full"/>
  <entry>
    <id>https://spreadsheets.google.com/feeds/cells/key/od6/private/full/R1C1</id>
    <title type="text">A1</title>
    <link rel="edit" type="application/atom+xml"
          href="https://spreadsheets.google.com/feeds/cells/key/od6/private/full/R1C1/v1"/>
    <gs:cell row="1" col="1" inputValue="name">name</gs:cell>
  </entry>
  <entry>
    <id>https://spreadsheets.google.com/feeds/cells/key/od6/private/full/R2C2</id>
    <title type="text">B2</title>
    <link rel="edit" type="application/atom+xml"
          href="https://spreadsheets.google.com/feeds/cells/key/od6/private/full/R2C2/v1"/>
    <gs:cell row="2" col="2" inputValue="=1+2" numericValue="3.0">3</gs:cell>
  </entry>
</feed>
"""

class RecordingRequest():
    """
    Stands in for SpreadsheetServiceRequest, records each call and
    answers with the queued responses in order.
    """
    def __init__(self, *responses: str) -> None:
        self.calls = []
        self.responses = list(responses)

    def _answer(self, method, url, body=None) -> str:
        self.calls.append((method, url, body))
        return self.responses.pop(0) if self.responses else ""

    def get(self, url):
        return self._answer("GET", url)

    def post(self, url, body):
        return self._answer("POST", url, body)

    def put(self, url, body):
        return self._answer("PUT", url, body)

    def delete(self, url):
        return self._answer("DELETE", url)

@pytest.fixture
def worksheet_xml():
    return WORKSHEET_ENTRY

@pytest.fixture
def list_feed_xml():
    return LIST_FEED

@pytest.fixture
def cell_feed_xml():
    return CELL_FEED

@pytest.fixture
def recorder():
    """factory for a RecordingRequest with queued responses"""
    return RecordingRequest
