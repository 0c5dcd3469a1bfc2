"""Domain errors raised at editing and import boundaries."""


class PortfolioError(Exception):
    """Base error for portfolio editing and interchange failures."""


class EntityNotFoundError(PortfolioError):
    """Raised when an edit targets an unknown asset or liability id."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"Unknown {entity} id: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class DuplicateEntityError(PortfolioError):
    """Raised when adding an entity whose id is already in use."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"Duplicate {entity} id: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InterchangeFormatError(PortfolioError):
    """Raised when a backup document cannot be parsed into a snapshot."""


__all__ = [
    "PortfolioError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "InterchangeFormatError",
]
