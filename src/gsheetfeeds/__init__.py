"""
A small client for the Google Spreadsheets GData feeds.
The feeds are Atom XML, the goal is to hide that behind typed entries
and accessors so callers deal in worksheets, rows and cells rather
than XML elements and link relations.

Python dataclasses are used for the parsed entries and most of the logic
is translating between those and the feed documents.  Authentication is
handled by the access singleton, which hands an authorized session to
the service request everything else goes through.
"""
