"""
Address value object embedded in members and deliveries.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """
    Immutable postal address.

    Mapped as a composite of three columns wherever it is embedded, and
    hashable so it can take part in grouping keys.

    Attributes:
        city: City name
        street: Street line
        zipcode: Postal code
    """

    city: str
    street: str
    zipcode: str

    def __str__(self) -> str:
        return f"{self.street}, {self.city} {self.zipcode}"
