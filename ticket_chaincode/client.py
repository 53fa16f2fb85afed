"""Off-chain client for the ticket chaincode.

Calls the contract through a chaincode gateway sidecar over HTTP:

    POST /chaincode/invoke   submit a transaction (writes)
    GET  /chaincode/query    evaluate a transaction (reads)

The gateway answers with ``{"result": ...}`` or ``{"error": ...}``.

Example usage:
    from ticket_chaincode import Ticket, TicketClient

    client = TicketClient(gateway_url="http://localhost:7051")
    client.init_ledger()
    client.change_ticket_owner("Ticket0", "Dave")
    ticket = client.query_ticket("Ticket0")
"""

import json
import os
import sys
from typing import Any

import httpx
from pydantic import ValidationError

from ticket_chaincode._internal.http import create_http_client
from ticket_chaincode.exceptions import (
    ChaincodeAPIError,
    ChaincodeConfigError,
    ChaincodeDecodeError,
)
from ticket_chaincode.models import QueryResult, QueryResults, Ticket

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_CHAINCODE_NAME = "testNetwork"

INVOKE_PATH = "/chaincode/invoke"
QUERY_PATH = "/chaincode/query"


class TicketClient:
    """Gateway client for the ticket chaincode.

    Unlike the contract, this client raises: gateway errors become
    ChaincodeAPIError and an unconfigured client raises ChaincodeConfigError.

    Use `TicketClient.from_env()` to create a client from environment variables.
    """

    def __init__(
        self,
        *,
        gateway_url: str | None = None,
        gateway_token: str | None = None,
        chaincode_name: str = DEFAULT_CHAINCODE_NAME,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            gateway_url: Base URL of the chaincode gateway.
            gateway_token: Optional bearer token for the gateway.
            chaincode_name: Name the contract is deployed under.
            timeout_ms: Request timeout in milliseconds.
            debug: Enable debug logging to stderr.
        """
        self._gateway_url = gateway_url
        self._gateway_token = gateway_token
        self._chaincode_name = chaincode_name
        self._timeout_ms = timeout_ms
        self._debug = debug
        self._enabled = bool(gateway_url)

    @classmethod
    def from_env(cls) -> "TicketClient":
        """Create a client from environment variables.

        Required environment variables:
            TICKET_GATEWAY_URL: The gateway base URL.

        Optional environment variables:
            TICKET_GATEWAY_TOKEN: Bearer token for the gateway.
            TICKET_CHAINCODE_NAME: Deployed chaincode name.
            TICKET_GATEWAY_TIMEOUT_MS: Request timeout in milliseconds.
            TICKET_GATEWAY_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A configured TicketClient. If TICKET_GATEWAY_URL is missing, the
            client is disabled and every call raises ChaincodeConfigError.
        """
        timeout_ms = int(os.environ.get("TICKET_GATEWAY_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))

        return cls(
            gateway_url=os.environ.get("TICKET_GATEWAY_URL"),
            gateway_token=os.environ.get("TICKET_GATEWAY_TOKEN"),
            chaincode_name=os.environ.get("TICKET_CHAINCODE_NAME", DEFAULT_CHAINCODE_NAME),
            timeout_ms=timeout_ms,
            debug=os.environ.get("TICKET_GATEWAY_DEBUG", "") == "1",
        )

    @property
    def enabled(self) -> bool:
        """Check if the client has a gateway to talk to."""
        return self._enabled

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[ticket-chaincode:client] {message}", file=sys.stderr)

    # =========================================================================
    # Contract Functions
    # =========================================================================

    def init_ledger(self) -> None:
        """Seed the ledger with the sample tickets."""
        self._submit("initLedger", [])

    def create_ticket(self, key: str, ticket: Ticket) -> None:
        """Store ``ticket`` under ``key``, overwriting any existing value."""
        self._submit(
            "createTicket",
            [key, ticket.organizer, ticket.event, ticket.date, ticket.owner],
        )

    def change_ticket_owner(self, key: str, new_owner: str) -> None:
        """Transfer the ticket at ``key`` to ``new_owner``."""
        self._submit("changeTicketOwner", [key, new_owner])

    def query_ticket(self, key: str) -> Ticket | None:
        """Look up a ticket.

        Returns:
            The ticket, or None if nothing is stored under ``key``.
        """
        result = self._evaluate("queryTicket", [key])
        if not result:
            return None
        try:
            return Ticket.from_json(result)
        except ValidationError as e:
            raise ChaincodeDecodeError(key, e.errors()[0]["msg"]) from e

    def query_all_tickets(self) -> list[QueryResult]:
        """List every ticket in the contract's scan range."""
        result = self._evaluate("queryAllTickets", [])
        if not result:
            return []
        try:
            return QueryResults.validate_json(result)
        except ValidationError as e:
            raise ChaincodeAPIError(f"Malformed queryAllTickets result: {e.errors()[0]['msg']}") from e

    # =========================================================================
    # Transport
    # =========================================================================

    def _submit(self, function: str, args: list[str]) -> str:
        body = {"contract": self._chaincode_name, "function": function, "args": args}
        self._log_debug(f"Submitting {function} {args}")
        return self._request("POST", INVOKE_PATH, json=body)

    def _evaluate(self, function: str, args: list[str]) -> str:
        params = {
            "contract": self._chaincode_name,
            "function": function,
            "args": json.dumps(args),
        }
        self._log_debug(f"Evaluating {function} {args}")
        return self._request("GET", QUERY_PATH, params=params)

    def _request(self, method: str, path: str, **kwargs: Any) -> str:
        if not self._enabled:
            raise ChaincodeConfigError("Gateway URL not configured (set TICKET_GATEWAY_URL)")

        try:
            with create_http_client(
                timeout=self._timeout_ms / 1000,
                base_url=self._gateway_url,
                token=self._gateway_token,
            ) as client:
                response = client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            self._log_debug(f"{method} {path} timed out")
            raise ChaincodeAPIError("Gateway request timed out") from e
        except httpx.HTTPError as e:
            self._log_debug(f"{method} {path} error: {e}")
            raise ChaincodeAPIError(f"Gateway request failed: {e}") from e

        return self._parse_result(response)

    def _parse_result(self, response: httpx.Response) -> str:
        """Extract the ``result`` string from a gateway response."""
        try:
            data = response.json()
        except ValueError:
            data = None

        message = data.get("error") if isinstance(data, dict) else None

        if response.status_code < 200 or response.status_code >= 300:
            self._log_debug(f"Gateway returned status {response.status_code}")
            raise ChaincodeAPIError(
                message or f"Gateway returned status {response.status_code}",
                status_code=response.status_code,
            )
        if message:
            raise ChaincodeAPIError(message, status_code=response.status_code)
        if not isinstance(data, dict):
            raise ChaincodeAPIError(
                "Unexpected gateway response format", status_code=response.status_code
            )

        result = data.get("result")
        if result is None:
            return ""
        if isinstance(result, str):
            return result
        # Some gateways decode JSON payloads before returning them
        return json.dumps(result)


def get_ticket_client() -> TicketClient:
    """Get a ticket client configured from environment variables.

    Returns:
        A configured TicketClient instance.
    """
    return TicketClient.from_env()
