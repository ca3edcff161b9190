"""
Infrastructure Layer
====================

Concrete adapters for the domain interfaces.

Contains:
- db: MongoDB connection, unit of work and repositories
- notifications: Kafka publisher for the notification/chat bridge
"""
