# Routes package init
"""
GuestNotes Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET    /notes           (list the caller's notes)
                  POST   /notes           (create)
                  PUT    /notes/{id}      (update)
                  DELETE /notes/{id}      (delete)
    - health.py:  GET    /                (liveness)
                  GET    /health          (database probe)

Routes stay thin: extract the owner context and body, call NoteService,
pick the status code. Ownership rules live in the service.
"""
