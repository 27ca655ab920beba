# =============================================================================
# core/resources.py  —  Resource Provider
# =============================================================================
#
# One static, discoverable resource:
#
#   contextrepo://capabilities  →  GET /v1/mcp/capabilities, returned verbatim
#
# Anything else is a ResourceNotFoundError.  Backend failures propagate as
# OperationError from the ApiClient; the MCP layer reports them.
# =============================================================================

import logging
from typing import Any

from core.errors import ResourceNotFoundError
from core.models import HttpMethod, ResourceContents, ResourceDescriptor
from core.operations import to_json

logger = logging.getLogger(__name__)

CAPABILITIES_URI = "contextrepo://capabilities"
CAPABILITIES_PATH = "/v1/mcp/capabilities"

RESOURCES: tuple[ResourceDescriptor, ...] = (
    ResourceDescriptor(
        uri=CAPABILITIES_URI,
        name="API Capabilities",
        description="View available Context Repo API capabilities",
        mime_type="application/json",
    ),
)


class ResourceProvider:
    def __init__(self, client: Any):
        self._client = client

    def list_resources(self) -> tuple[ResourceDescriptor, ...]:
        logger.info("[MCP] Listing resources")
        return RESOURCES

    async def read_resource(self, uri: str) -> ResourceContents:
        """Fetch one resource's contents.

        Raises:
            ResourceNotFoundError: for any URI other than the capabilities one.
            OperationError: if the backend call fails.
        """
        logger.info("[MCP] Reading resource: %s", uri)

        if uri != CAPABILITIES_URI:
            raise ResourceNotFoundError(uri)

        payload = await self._client.execute(HttpMethod.GET, CAPABILITIES_PATH)
        return ResourceContents(uri=uri, mime_type="application/json", text=to_json(payload))
