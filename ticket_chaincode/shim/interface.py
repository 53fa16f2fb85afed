"""Host stub interface seen by the chaincode.

The host platform owns storage, ordering and endorsement. The contract only
sees the narrow surface declared here. Stub implementations report storage
failures by raising ChaincodeStateError.
"""

from typing import Protocol

from pydantic import BaseModel

from ticket_chaincode.shim.response import Response


class KV(BaseModel):
    """A single key/value pair returned by a range scan."""

    key: str
    value: bytes


class StateQueryIterator(Protocol):
    """Iterator over a key range, in lexical key order."""

    def has_next(self) -> bool: ...

    def next(self) -> KV: ...

    def close(self) -> None: ...


class ChaincodeStub(Protocol):
    """State access handed to the chaincode for one invocation."""

    def get_function_and_parameters(self) -> tuple[str, list[str]]: ...

    def get_state(self, key: str) -> bytes | None: ...

    def put_state(self, key: str, value: bytes) -> None: ...

    def get_state_by_range(self, start_key: str, end_key: str) -> StateQueryIterator: ...


class Chaincode(Protocol):
    """Entry points the host calls on a contract."""

    def init(self, stub: ChaincodeStub) -> Response: ...

    def invoke(self, stub: ChaincodeStub) -> Response: ...
