"""
Link repository.

Provides data access for social/platform links, including the public click
counter.
"""

from pathlib import Path
from typing import List, Optional

from linkhub.core.logging_config import get_logger, log_with_context
from linkhub.models.link import Link
from linkhub.store.collection import CollectionStore, required_fields
from linkhub.store.gate import AccessGate, CallerContext

logger = get_logger(__name__)

LINKS_FILENAME = "links.json"


class LinkRepository:
    """
    Repository for link data access.

    Attributes:
        store: Collection store backing ``links.json``
        gate: Access gate consulted by create and delete
    """

    def __init__(self, data_directory: Path, gate: Optional[AccessGate] = None):
        """
        Initialize repository over a data directory.

        Args:
            data_directory: Directory holding links.json
            gate: Access gate (a fresh AccessGate if omitted)
        """
        self.store: CollectionStore[Link] = CollectionStore(
            name="links",
            path=Path(data_directory) / LINKS_FILENAME,
            model=Link,
            validator=required_fields("platform", "url"),
            label="Link",
        )
        self.gate = gate or AccessGate()

    async def list(self) -> List[Link]:
        """Return every link in insertion order. Public."""
        return await self.store.list()

    async def get(self, link_id: int) -> Optional[Link]:
        return await self.store.get_by_id(link_id)

    async def create(
        self,
        context: CallerContext,
        platform: Optional[str],
        url: Optional[str],
        icon: Optional[str] = None,
    ) -> Link:
        """
        Create a link with a fresh id and a zero click count.

        Raises:
            Unauthorized: Caller is not an admin
            ValidationError: platform or url missing/empty
        """
        self.gate.require(context, action="create_link")
        return await self.store.insert({"platform": platform, "url": url, "icon": icon})

    async def delete(self, context: CallerContext, link_id: int) -> bool:
        """
        Delete a link by id.

        Raises:
            Unauthorized: Caller is not an admin
            NotFound: No link with that id
        """
        self.gate.require(context, action="delete_link")
        return await self.store.delete_by_id(link_id)

    async def record_click(self, link_id: int) -> Link:
        """
        Increment a link's click counter. Public.

        Raises:
            NotFound: No link with that id
        """
        link = await self.store.mutate(
            link_id,
            lambda current: current.model_copy(update={"click_count": current.click_count + 1}),
        )
        log_with_context(
            logger,
            "info",
            "Click recorded",
            collection="links",
            record_id=link_id,
            click_count=link.click_count,
        )
        return link
