"""Public models for ticket ledger records."""

from ticket_chaincode.models.ticket import (
    SEED_TICKETS,
    QueryResult,
    QueryResults,
    Ticket,
    escape_json,
    seed_key,
)

__all__ = ["Ticket", "QueryResult", "QueryResults", "SEED_TICKETS", "seed_key", "escape_json"]
