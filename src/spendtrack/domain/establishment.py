"""Establishment domain service."""

from typing import Any, Optional

from spendtrack.database.gateway import StorageGateway
from spendtrack.domain.entities import Establishment
from spendtrack.domain.errors import establishment_not_found
from spendtrack.domain.parent import ParentEntityService
from spendtrack.repositories.base import Clock
from spendtrack.repositories.establishment import EstablishmentRepository


class EstablishmentService(ParentEntityService[Establishment]):
    """Service for managing establishments."""

    entity_name = "Establishment"

    def __init__(self, gateway: StorageGateway, clock: Optional[Clock] = None):
        super().__init__(EstablishmentRepository(gateway, clock), establishment_not_found)

    def search_by_name(self, fragment: Any) -> list[Establishment]:
        """Find establishments whose name contains fragment, ordered by name."""
        return self.repository.search_by_name(self._require_fragment(fragment, "Name"))

    def search_by_address(self, fragment: Any) -> list[Establishment]:
        """Find establishments whose address contains fragment (e.g. a city)."""
        return self.repository.search_by_address(self._require_fragment(fragment, "Address"))
