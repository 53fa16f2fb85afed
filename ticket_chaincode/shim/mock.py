"""In-memory stub for running the chaincode without a peer."""

from collections.abc import Iterator

from ticket_chaincode.exceptions import ChaincodeStateError
from ticket_chaincode.shim.interface import KV, Chaincode
from ticket_chaincode.shim.response import Response


class MockStateIterator:
    """Range iterator over a snapshot of mock state."""

    def __init__(self, items: list[KV], *, fail_at: int | None = None) -> None:
        self._items = items
        self._index = 0
        self._fail_at = fail_at
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def has_next(self) -> bool:
        return not self._closed and self._index < len(self._items)

    def next(self) -> KV:
        if self._closed:
            raise ChaincodeStateError("iterator is closed")
        if self._fail_at is not None and self._index == self._fail_at:
            raise ChaincodeStateError(f"failed to read range result at position {self._index}")
        if self._index >= len(self._items):
            raise ChaincodeStateError("no more range results")
        item = self._items[self._index]
        self._index += 1
        return item

    def close(self) -> None:
        self._closed = True

    def __iter__(self) -> Iterator[KV]:
        while self.has_next():
            yield self.next()

    def __enter__(self) -> "MockStateIterator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MockStub:
    """In-memory ChaincodeStub.

    State is a plain dict of key to bytes. Writes are only accepted inside a
    mock transaction; ``mock_init`` and ``mock_invoke`` open one around the
    contract call.

    Test hooks:
        fail_range_scan: If set, ``get_state_by_range`` raises with this message.
        fail_next_at: If set, iterators fail when reading this position.
        fail_get_state: If set, ``get_state`` raises with this message.
    """

    def __init__(self, name: str, contract: Chaincode) -> None:
        self.name = name
        self.contract = contract
        self.state: dict[str, bytes] = {}
        self.tx_id: str | None = None
        self.fail_range_scan: str | None = None
        self.fail_next_at: int | None = None
        self.fail_get_state: str | None = None
        self.iterators: list[MockStateIterator] = []
        self._function = ""
        self._args: list[str] = []

    # =========================================================================
    # Stub Interface
    # =========================================================================

    def get_function_and_parameters(self) -> tuple[str, list[str]]:
        return self._function, list(self._args)

    def get_state(self, key: str) -> bytes | None:
        if self.fail_get_state is not None:
            raise ChaincodeStateError(self.fail_get_state)
        return self.state.get(key)

    def put_state(self, key: str, value: bytes) -> None:
        if self.tx_id is None:
            raise ChaincodeStateError(
                "cannot put state without a transaction - call mock_transaction_start()"
            )
        if not key:
            raise ChaincodeStateError("key must not be an empty string")
        self.state[key] = bytes(value)

    def get_state_by_range(self, start_key: str, end_key: str) -> MockStateIterator:
        """Scan keys with ``start_key <= key < end_key``; an empty bound is open."""
        if self.fail_range_scan is not None:
            raise ChaincodeStateError(self.fail_range_scan)
        items = [
            KV(key=key, value=self.state[key])
            for key in sorted(self.state)
            if (not start_key or key >= start_key) and (not end_key or key < end_key)
        ]
        iterator = MockStateIterator(items, fail_at=self.fail_next_at)
        self.iterators.append(iterator)
        return iterator

    # =========================================================================
    # Mock Driver
    # =========================================================================

    def mock_transaction_start(self, tx_id: str) -> None:
        self.tx_id = tx_id

    def mock_transaction_end(self, tx_id: str) -> None:
        self.tx_id = None

    def mock_init(self, tx_id: str, args: list[str]) -> Response:
        """Run the contract's init inside a mock transaction."""
        self._set_args(args)
        self.mock_transaction_start(tx_id)
        try:
            return self.contract.init(self)
        finally:
            self.mock_transaction_end(tx_id)

    def mock_invoke(self, tx_id: str, args: list[str]) -> Response:
        """Run the contract's invoke inside a mock transaction.

        Args:
            tx_id: Transaction id for the call.
            args: Function name followed by its string parameters.
        """
        self._set_args(args)
        self.mock_transaction_start(tx_id)
        try:
            return self.contract.invoke(self)
        finally:
            self.mock_transaction_end(tx_id)

    def _set_args(self, args: list[str]) -> None:
        self._function = args[0] if args else ""
        self._args = list(args[1:])
