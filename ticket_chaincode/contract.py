"""Ticket registry smart contract."""

import os
import sys
from collections.abc import Callable

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ticket_chaincode import shim
from ticket_chaincode.exceptions import (
    ChaincodeArgumentError,
    ChaincodeDecodeError,
    ChaincodeError,
    ChaincodeFunctionError,
    ChaincodeStateError,
)
from ticket_chaincode.models import (
    SEED_TICKETS,
    QueryResult,
    QueryResults,
    Ticket,
    escape_json,
    seed_key,
)
from ticket_chaincode.shim import ChaincodeStub, Response

DEFAULT_RANGE_START = "TICKET0"
DEFAULT_RANGE_END = "TICKET999"

Handler = Callable[[ChaincodeStub, list[str]], Response]


class SmartContract:
    """Ticket registry chaincode.

    The host calls `init` once when the contract is instantiated and `invoke`
    for every transaction. `invoke` routes on the function name to one of
    five handlers. Handler failures are reported as error responses; invoke
    never raises for a ChaincodeError.

    Use `SmartContract.from_env()` to pick up the scan range and debug flag
    from environment variables.
    """

    def __init__(
        self,
        *,
        range_start: str = DEFAULT_RANGE_START,
        range_end: str = DEFAULT_RANGE_END,
        debug: bool = False,
    ) -> None:
        """Initialize the contract.

        Args:
            range_start: First key (inclusive) scanned by queryAllTickets.
            range_end: Last key (exclusive) scanned by queryAllTickets.
            debug: Enable debug logging to stderr.
        """
        self._range_start = range_start
        self._range_end = range_end
        self._debug = debug
        self._handlers: dict[str, Handler] = {
            "queryTicket": self.query_ticket,
            "initLedger": self.init_ledger,
            "createTicket": self.create_ticket,
            "queryAllTickets": self.query_all_tickets,
            "changeTicketOwner": self.change_ticket_owner,
        }

    @classmethod
    def from_env(cls) -> "SmartContract":
        """Create a contract from environment variables.

        Optional environment variables:
            TICKET_CHAINCODE_DEBUG: Set to "1" to enable debug logging.
            TICKET_CHAINCODE_RANGE_START: queryAllTickets start key.
            TICKET_CHAINCODE_RANGE_END: queryAllTickets end key.

        Returns:
            A configured SmartContract.
        """
        return cls(
            range_start=os.environ.get("TICKET_CHAINCODE_RANGE_START", DEFAULT_RANGE_START),
            range_end=os.environ.get("TICKET_CHAINCODE_RANGE_END", DEFAULT_RANGE_END),
            debug=os.environ.get("TICKET_CHAINCODE_DEBUG", "") == "1",
        )

    @property
    def functions(self) -> list[str]:
        """Names of the functions `invoke` accepts."""
        return list(self._handlers)

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[ticket-chaincode] {message}", file=sys.stderr)

    # =========================================================================
    # Entry Points
    # =========================================================================

    def init(self, stub: ChaincodeStub) -> Response:
        """Called once at instantiation. Seeding is left to initLedger."""
        return shim.success()

    def invoke(self, stub: ChaincodeStub) -> Response:
        """Route the requested function to its handler.

        Args:
            stub: Host stub for this transaction.

        Returns:
            The handler's response, or an error response if the function is
            unknown or the handler failed.
        """
        function, args = stub.get_function_and_parameters()
        try:
            handler = self._handlers.get(function)
            if handler is None:
                raise ChaincodeFunctionError(function)
            return handler(stub, args)
        except ChaincodeError as e:
            self._log_debug(f"{function or '<empty>'} failed: {e}")
            return shim.error(str(e))

    # =========================================================================
    # Handlers
    # =========================================================================

    def query_ticket(self, stub: ChaincodeStub, args: list[str]) -> Response:
        """Return the raw stored ticket, or an empty payload if absent."""
        self._check_args(args, 1)
        return shim.success(stub.get_state(args[0]))

    def init_ledger(self, stub: ChaincodeStub, args: list[str]) -> Response:
        """Write the six seed tickets under Ticket0..Ticket5."""
        for i, ticket in enumerate(SEED_TICKETS):
            key = seed_key(i)
            stub.put_state(key, ticket.to_json())
            self._log_debug(f"Added {key}: {ticket.event} ({ticket.owner})")
        return shim.success()

    def create_ticket(self, stub: ChaincodeStub, args: list[str]) -> Response:
        """Store a new ticket, overwriting any existing value at the key."""
        self._check_args(args, 5)
        key, organizer, event, date, owner = args
        ticket = Ticket(organizer=organizer, event=event, date=date, owner=owner)
        stub.put_state(key, self._encode(key, ticket))
        self._log_debug(f"Created {key}")
        return shim.success()

    def query_all_tickets(self, stub: ChaincodeStub, args: list[str]) -> Response:
        """Return every ticket in the configured key range as a JSON array."""
        results: list[QueryResult] = []
        iterator = stub.get_state_by_range(self._range_start, self._range_end)
        try:
            while iterator.has_next():
                kv = iterator.next()
                results.append(QueryResult(key=kv.key, record=self._decode(kv.key, kv.value)))
        finally:
            iterator.close()

        try:
            payload = escape_json(QueryResults.dump_json(results, by_alias=True))
        except PydanticSerializationError as e:
            raise ChaincodeStateError(f"Failed to encode query results: {e}") from e
        self._log_debug(
            f"queryAllTickets [{self._range_start}, {self._range_end}): {len(results)} result(s)"
        )
        return shim.success(payload)

    def change_ticket_owner(self, stub: ChaincodeStub, args: list[str]) -> Response:
        """Rewrite the owner of an existing ticket; other fields are untouched."""
        self._check_args(args, 2)
        key, new_owner = args

        ticket_bytes = stub.get_state(key)
        if not ticket_bytes:
            raise ChaincodeStateError(f"Ticket {key} does not exist")

        ticket = self._decode(key, ticket_bytes)
        updated = ticket.model_copy(update={"owner": new_owner})
        stub.put_state(key, self._encode(key, updated))
        self._log_debug(f"Transferred {key}: {ticket.owner} -> {new_owner}")
        return shim.success()

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_args(args: list[str], expected: int) -> None:
        if len(args) != expected:
            raise ChaincodeArgumentError(expected, len(args))

    @staticmethod
    def _decode(key: str, value: bytes) -> Ticket:
        try:
            return Ticket.from_json(value)
        except ValidationError as e:
            raise ChaincodeDecodeError(key, e.errors()[0]["msg"]) from e

    @staticmethod
    def _encode(key: str, ticket: Ticket) -> bytes:
        try:
            return ticket.to_json()
        except (PydanticSerializationError, UnicodeEncodeError) as e:
            raise ChaincodeStateError(f"Failed to encode ticket {key}: {e}") from e
