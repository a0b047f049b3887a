# Services package init
"""
GuestNotes Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - NoteService: ownership-scoped list/create/update/delete of notes
"""
