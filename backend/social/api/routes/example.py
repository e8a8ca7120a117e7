"""Example Route — static JSON status endpoint.

Invariants:
    - GET /example always returns 200, application/json, body exactly {"status":"ok"}
    - Request body, query and headers are ignored
"""

from fastapi import Response

from social.api.route_table import Route

HTTP_METHOD = "GET"
HTTP_PATH = "/example"
STATUS_OK_BODY = b'{"status":"ok"}'


async def example_handler() -> Response:
    return Response(content=STATUS_OK_BODY, media_type="application/json")


def route() -> Route:
    return Route(
        HTTP_METHOD, HTTP_PATH, example_handler, name="example", tags=("example",),
    )
