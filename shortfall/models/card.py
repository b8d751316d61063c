from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    One line item from a collection or deck list.

    Attributes:
        name: Cleaned display name (never empty once parsed)
        quantity: Number of copies, always positive
        set_code: Set code as exported (e.g., "2ed", "NEO")
        set_name: Full set name
        collector_number: Collector number within set (may carry a letter suffix)
        foil: True if the export marked this printing as foil
        condition: Free-form condition string (e.g., "NM")
        language: Free-form language string (e.g., "English")
    """

    name: str
    quantity: int = 1
    set_code: str | None = None
    set_name: str | None = None
    collector_number: str | None = None
    foil: bool = False
    condition: str | None = None
    language: str | None = None
