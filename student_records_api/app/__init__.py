"""
Application package.

``core`` holds configuration, logging and database access,
``services`` the business rules, ``schemas`` the request and response
models and ``api`` the HTTP routes.
"""
