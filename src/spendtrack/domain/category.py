"""Category domain service."""

from typing import Any, Optional

from spendtrack.database.gateway import StorageGateway
from spendtrack.domain.entities import Category
from spendtrack.domain.errors import category_not_found
from spendtrack.domain.parent import ParentEntityService
from spendtrack.repositories.base import Clock
from spendtrack.repositories.category import CategoryRepository


class CategoryService(ParentEntityService[Category]):
    """Service for managing categories."""

    entity_name = "Category"

    def __init__(self, gateway: StorageGateway, clock: Optional[Clock] = None):
        """Initialize category service.

        Args:
            gateway: Storage gateway
            clock: Optional timestamp source for created_at/updated_at
        """
        super().__init__(CategoryRepository(gateway, clock), category_not_found)

    def search(self, fragment: Any) -> list[Category]:
        """Find categories whose description contains fragment.

        Raises:
            ValidationError: If fragment is blank
        """
        return self.repository.search_by_description(self._require_fragment(fragment, "Description"))
