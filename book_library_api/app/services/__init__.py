"""
Service layer abstraction.

``book_validation`` holds the field rules, ``book_store`` the SQLite
persistence collaborator and ``book_service`` the domain operations
that tie them together.  API handlers only talk to ``BookService``.
"""
