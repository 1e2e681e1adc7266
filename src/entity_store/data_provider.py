"""Request-type entry point used by the admin UI.

The UI issues calls of the form (request_type, resource, params) with
react-admin shaped params, e.g.:

    GET_LIST     {"pagination": {"page": 1, "perPage": 10}}
    GET_ONE      {"id": "data/users/<uuid>"}
    UPDATE       {"id": "...", "data": {...}}
    DELETE       {"id": "...", "previousData": {...}}

and expects {"data": ...} results ({"data": ..., "total": n} for GET_LIST).
"""

import logging
from typing import Any, Dict

from src.gitlab_client.errors import UnsupportedOperationError

from .dispatcher import ResourceDispatcher

logger = logging.getLogger(__name__)

GET_LIST = "GET_LIST"
GET_ONE = "GET_ONE"
GET_MANY = "GET_MANY"
CREATE = "CREATE"
UPDATE = "UPDATE"
UPDATE_MANY = "UPDATE_MANY"
DELETE = "DELETE"
DELETE_MANY = "DELETE_MANY"

REQUEST_TYPES = (
    GET_LIST,
    GET_ONE,
    GET_MANY,
    CREATE,
    UPDATE,
    UPDATE_MANY,
    DELETE,
    DELETE_MANY,
)

DEFAULT_PAGINATION = {"page": 1, "perPage": 10}


class DataProvider:
    """Callable translating UI requests into provider calls.

    Example:
        >>> data_provider = DataProvider(ResourceDispatcher(client, config))
        >>> data_provider(GET_LIST, "users", {"pagination": {"page": 1, "perPage": 25}})
        {"data": [...], "total": 42}
    """

    def __init__(self, dispatcher: ResourceDispatcher):
        self.dispatcher = dispatcher

    def __call__(self, request_type: str, resource: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one UI request.

        Raises:
            UnsupportedOperationError: If request_type is unknown or the
                resource does not support it
            GitProviderError: Any error from the provider, unmodified
        """
        logger.debug(f"{request_type} {resource}")
        provider = self.dispatcher.provider_for(resource)

        if request_type == GET_LIST:
            pagination = params.get("pagination") or DEFAULT_PAGINATION
            result = provider.list(
                int(pagination.get("page", DEFAULT_PAGINATION["page"])),
                int(pagination.get("perPage", DEFAULT_PAGINATION["perPage"])),
            )
            return {"data": result.items, "total": result.total}
        if request_type == GET_ONE:
            return {"data": provider.get_one(params["id"])}
        if request_type == GET_MANY:
            return {"data": provider.get_many(list(params["ids"]))}
        if request_type == CREATE:
            return {"data": provider.create(params["data"])}
        if request_type == UPDATE:
            return {"data": provider.update(params["id"], params["data"])}
        if request_type == UPDATE_MANY:
            return {"data": provider.update_many(list(params["ids"]), params["data"])}
        if request_type == DELETE:
            return {"data": provider.delete(params["id"], params.get("previousData") or {})}
        if request_type == DELETE_MANY:
            return {"data": provider.delete_many(list(params["ids"]))}

        raise UnsupportedOperationError(resource, request_type)
