"""Party entity: one side of a transaction (payer or payee)."""

import re
from dataclasses import dataclass

_IBAN_SHAPE = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}$")


@dataclass(frozen=True)
class Party:
    """
    A transaction party identified by name and account identifier (IBAN).

    Two equality notions exist:
        - equals(): same name (case and surrounding whitespace ignored)
          AND same normalized account identifier
        - similar_to(): same name only, for sources whose account
          identifiers are missing or unreliable
    """

    name: str = ""
    account_identifier: str = ""

    @classmethod
    def create(cls, name: str = "", account_identifier: str = "") -> "Party":
        """Create a party with surrounding whitespace trimmed."""
        return cls(name=(name or "").strip(), account_identifier=(account_identifier or "").strip())

    def is_empty(self) -> bool:
        return self.name == "" and self.account_identifier == ""

    def has_name(self) -> bool:
        return self.name.strip() != ""

    def has_account_identifier(self) -> bool:
        return self.account_identifier.strip() != ""

    @property
    def normalized_account_identifier(self) -> str:
        """Uppercased identifier with all spaces removed."""
        return self.account_identifier.replace(" ", "").upper()

    @property
    def formatted_account_identifier(self) -> str:
        """Normalized identifier grouped in blocks of four for display."""
        normalized = self.normalized_account_identifier
        return " ".join(normalized[i:i + 4] for i in range(0, len(normalized), 4))

    def validate_account_identifier(self) -> bool:
        """
        Check the shape of the account identifier.

        This is a format check only: two letters, two digits, then 11-30
        alphanumerics (15-34 characters once normalized). It does NOT
        verify the IBAN checksum or any country-specific length rule.
        An empty identifier is valid because the field is optional.
        """
        if self.account_identifier == "":
            return True
        return bool(_IBAN_SHAPE.match(self.normalized_account_identifier))

    def equals(self, other: "Party") -> bool:
        return (
            self.name.strip().casefold() == other.name.strip().casefold()
            and self.normalized_account_identifier == other.normalized_account_identifier
        )

    def similar_to(self, other: "Party") -> bool:
        return self.name.strip().casefold() == other.name.strip().casefold()

    def __str__(self) -> str:
        if self.name and self.account_identifier:
            return f"{self.name} ({self.account_identifier})"
        return self.name or self.account_identifier
