"""
Domain Layer
============

Core business logic and domain models for the neighbour lending workflow.
This layer has no dependencies on external frameworks or infrastructure.

Contains:
- Models: LoanRequest, LoanOffer, Loan and the loan transition table
- Repository Interfaces: Abstract contracts for data access
- Exceptions: Typed business failures
- Events: Notifications handed to the chat/notification bridge
"""
