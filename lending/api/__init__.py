"""
API/Presentation Layer
======================

HTTP API layer using FastAPI.
This layer handles HTTP requests and responses.

Contains:
- Controllers: FastAPI route handlers
- Dependencies: Principal extraction and service lookup
- Error handlers: Domain exceptions -> HTTP status codes
"""
