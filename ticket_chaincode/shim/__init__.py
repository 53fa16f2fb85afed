"""Host-side boundary for the ticket chaincode.

WARNING: The real stub is supplied by the host platform at invocation time.
MockStub is an in-memory stand-in for tests and local runs.
"""

from ticket_chaincode.shim.interface import KV, Chaincode, ChaincodeStub, StateQueryIterator
from ticket_chaincode.shim.mock import MockStateIterator, MockStub
from ticket_chaincode.shim.response import ERROR, ERROR_THRESHOLD, OK, Response, error, success

__all__ = [
    "Chaincode",
    "ChaincodeStub",
    "StateQueryIterator",
    "KV",
    "Response",
    "success",
    "error",
    "OK",
    "ERROR",
    "ERROR_THRESHOLD",
    "MockStub",
    "MockStateIterator",
]
