"""
Application Layer
=================

Application services and use cases.
This layer orchestrates domain entities and repositories.

Contains:
- Use Cases: Business operations (create request, make offer, form agreement, ...)
- Services: Application services that coordinate multiple use cases
- DTOs: Request/response schemas for the HTTP surface
"""
