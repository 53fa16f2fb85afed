"""Public exceptions for the ticket chaincode."""


class ChaincodeError(Exception):
    """Base exception for all ticket chaincode errors."""


class ChaincodeArgumentError(ChaincodeError):
    """Wrong number of arguments passed to a contract function."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"Incorrect number of arguments. Expecting {expected}")
        self.expected = expected
        self.received = received


class ChaincodeFunctionError(ChaincodeError):
    """Unknown contract function name."""

    def __init__(self, function: str) -> None:
        super().__init__("Invalid Smart Contract function name.")
        self.function = function


class ChaincodeStateError(ChaincodeError):
    """Ledger read, write, or range iteration failure."""


class ChaincodeDecodeError(ChaincodeError):
    """Stored value is not a valid ticket document."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to decode ticket {key}: {reason}")
        self.key = key


class ChaincodeAPIError(ChaincodeError):
    """Error from the chaincode gateway."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChaincodeConfigError(ChaincodeError):
    """Configuration error (missing env vars, invalid config)."""
