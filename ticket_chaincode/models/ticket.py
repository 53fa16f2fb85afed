"""Pydantic models for ticket ledger records.

Tickets are stored on the ledger as compact JSON objects keyed by
``organisator``, ``event``, ``date`` and ``owner``, in that order.
"""

from pydantic import BaseModel, Field, TypeAdapter

# =============================================================================
# Constants
# =============================================================================

SEED_KEY_PREFIX = "Ticket"

# Ledger bytes escape HTML-sensitive characters and JS line separators
JSON_ESCAPES: tuple[tuple[bytes, bytes], ...] = (
    (b"&", b"\\u0026"),
    (b"<", b"\\u003c"),
    (b">", b"\\u003e"),
    ("\u2028".encode("utf-8"), b"\\u2028"),
    ("\u2029".encode("utf-8"), b"\\u2029"),
)


def escape_json(data: bytes) -> bytes:
    """Apply ledger escaping to serialized JSON.

    The escaped characters can only occur inside JSON strings, so the
    replacement never changes the document structure.
    """
    for raw, escaped in JSON_ESCAPES:
        data = data.replace(raw, escaped)
    return data


# =============================================================================
# Ledger Records
# =============================================================================


class Ticket(BaseModel):
    """A ticket record as stored on the ledger.

    Fields:
        organizer: Organizing venue (serialized as ``organisator``)
        event: Event name
        date: Event date, free-form and unvalidated
        owner: Current owner
    """

    organizer: str = Field(alias="organisator")
    event: str
    date: str
    owner: str

    model_config = {"populate_by_name": True}

    def to_json(self) -> bytes:
        """Encode the ticket as ledger bytes.

        Raises:
            pydantic_core.PydanticSerializationError: If a field cannot be encoded.
        """
        return escape_json(self.model_dump_json(by_alias=True).encode("utf-8"))

    @classmethod
    def from_json(cls, data: bytes | str) -> "Ticket":
        """Decode ledger bytes into a ticket.

        Raises:
            pydantic.ValidationError: If the data is not a ticket document.
        """
        return cls.model_validate_json(data)


class QueryResult(BaseModel):
    """One row of a range scan: the ledger key and its decoded ticket."""

    key: str = Field(alias="Key")
    record: Ticket = Field(alias="Record")

    model_config = {"populate_by_name": True}


QueryResults = TypeAdapter(list[QueryResult])

# =============================================================================
# Seed Data
# =============================================================================

SEED_TICKETS: tuple[Ticket, ...] = (
    Ticket(organizer="MadisonSquareGarden", event="Knicks-Bulls", date="20180501", owner="Carlos"),
    Ticket(organizer="MadisonSquareGarden", event="Knicks-Jazz", date="20180602", owner="Carlos"),
    Ticket(organizer="MadisonSquareGarden", event="Knicks-Heat", date="20180404", owner="Emad"),
    Ticket(organizer="BroadwayTheater", event="BruceSpringsteen", date="20180715", owner="Varad"),
    Ticket(organizer="BroadwayTheater", event="Madonna", date="201805010", owner="Phil"),
    Ticket(organizer="BroadwayTheater", event="CatStevens", date="20180519", owner="John"),
)


def seed_key(index: int) -> str:
    """Ledger key for the seed ticket at ``index``."""
    return f"{SEED_KEY_PREFIX}{index}"
