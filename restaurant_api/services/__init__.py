"""
Restaurant API - Services Layer
================================

What:  Logic between routes (HTTP) and the store gateway (persistence).

Service Inventory:
    - validation: The field rule set and path-id check (no I/O)
    - RestaurantService: One store round trip per CRUD operation, with
      driver results translated into values, NotFoundError or DatabaseError
"""
