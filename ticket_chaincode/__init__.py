"""Ticket registry chaincode for Python.

This package provides a ticket-registry smart contract for a permissioned
blockchain platform, plus an off-chain client for calling it through a gateway.

Public API:
    SmartContract - Chaincode entry point (init / invoke)
    TicketClient - Off-chain gateway client
    Ticket, QueryResult - Ledger record models

System-level:
    shim - Host stub interface, responses, and an in-memory MockStub
"""

from ticket_chaincode._version import __version__
from ticket_chaincode.client import TicketClient, get_ticket_client
from ticket_chaincode.contract import SmartContract
from ticket_chaincode.models import QueryResult, Ticket

__all__ = [
    "__version__",
    "SmartContract",
    "TicketClient",
    "get_ticket_client",
    "Ticket",
    "QueryResult",
]
