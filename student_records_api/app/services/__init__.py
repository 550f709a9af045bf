"""
Service layer.

Services encapsulate the business rules for a resource and are the
only code that talks to the database.
"""
