import asyncio
import json

import pytest

from core.errors import OperationError, ResourceNotFoundError
from core.models import ErrorKind
from core.resources import CAPABILITIES_URI, ResourceProvider


def test_lists_the_capabilities_resource(client):
    resources = ResourceProvider(client).list_resources()

    assert [resource.to_dict() for resource in resources] == [{
        "uri": "contextrepo://capabilities",
        "name": "API Capabilities",
        "description": "View available Context Repo API capabilities",
        "mimeType": "application/json",
    }]


def test_reads_capabilities_verbatim(client, backend):
    payload = {"version": "1", "features": ["prompts", "documents"]}
    backend.respond("GET", "/v1/mcp/capabilities", payload)

    contents = asyncio.run(ResourceProvider(client).read_resource(CAPABILITIES_URI))

    assert contents.uri == CAPABILITIES_URI
    assert contents.mime_type == "application/json"
    assert json.loads(contents.text) == payload
    assert contents.text == json.dumps(payload, indent=2)


def test_unknown_uri_makes_no_call(client, backend):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        asyncio.run(ResourceProvider(client).read_resource("contextrepo://other"))

    assert exc_info.value.message == "Unknown resource: contextrepo://other"
    assert backend.requests == []


def test_backend_failure_propagates(client, backend):
    backend.respond("GET", "/v1/mcp/capabilities", {}, status=401)

    with pytest.raises(OperationError) as exc_info:
        asyncio.run(ResourceProvider(client).read_resource(CAPABILITIES_URI))

    assert exc_info.value.kind is ErrorKind.AUTHENTICATION
