"""
Principal
=========

The authenticated caller, as supplied by the external identity service.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    user_id: str
    condo_id: str
    role: str = "resident"
