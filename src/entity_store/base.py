"""Common provider interface shared by file-backed and read-only providers."""

from typing import Any, Dict, List

from src.gitlab_client.errors import UnsupportedOperationError

from .models import Entity, ListResult


class BaseProvider:
    """Provider interface used by the resource dispatcher.

    Subclasses override the operations they support; every other operation
    raises UnsupportedOperationError.
    """

    def __init__(self, resource: str):
        self.resource = resource

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(self.resource, operation)

    def list(self, page: int, per_page: int) -> ListResult:
        raise self._unsupported('list')

    def get_one(self, id: str) -> Entity:
        raise self._unsupported('get_one')

    def get_many(self, ids: List[str]) -> List[Entity]:
        raise self._unsupported('get_many')

    def create(self, data: Dict[str, Any]) -> Entity:
        raise self._unsupported('create')

    def update(self, id: str, data: Dict[str, Any]) -> Entity:
        raise self._unsupported('update')

    def update_many(self, ids: List[str], data: Dict[str, Any]) -> List[str]:
        raise self._unsupported('update_many')

    def delete(self, id: str, previous_data: Dict[str, Any]) -> Entity:
        raise self._unsupported('delete')

    def delete_many(self, ids: List[str]) -> List[str]:
        raise self._unsupported('delete_many')


def page_window(page: int, per_page: int, total: int) -> slice:
    """Slice selecting the 1-based page of a list of total items.

    Out-of-range pages and non-positive sizes select nothing.
    """
    if page < 1 or per_page < 1:
        return slice(0, 0)
    start = min((page - 1) * per_page, total)
    return slice(start, min(start + per_page, total))
