"""Resource dispatcher mapping resource names to providers.

The mapping is a closed registry: "pipelines", "branches" and "commits"
are served by read-only providers over their GitLab collections, every other
name is a directory of JSON files under the data base path.
"""

import logging
from typing import TYPE_CHECKING, Dict

from .base import BaseProvider
from .entity_provider import EntityProvider
from .models import (
    BRANCHES,
    COMMITS,
    FILES,
    PIPELINES,
    CollectionDescriptor,
    ProviderConfig,
)
from .readonly_providers import BranchProvider, CommitProvider, PipelineProvider

if TYPE_CHECKING:
    from src.gitlab_client.api_wrapper import GitLabClient

logger = logging.getLogger(__name__)

READ_ONLY_PROVIDERS = {
    PIPELINES: PipelineProvider,
    BRANCHES: BranchProvider,
    COMMITS: CommitProvider,
}


class ResourceDispatcher:
    """Resolves resource names to provider instances.

    Resolution depends only on the name and the static configuration, so
    providers are built once per name and reused.

    Example:
        >>> dispatcher = ResourceDispatcher(client, config)
        >>> dispatcher.provider_for("users").list(1, 10)
    """

    def __init__(self, client: "GitLabClient", config: ProviderConfig):
        self.client = client
        self.config = config
        self._providers: Dict[str, BaseProvider] = {}

    def describe(self, resource: str) -> CollectionDescriptor:
        """Return how resource is backed.

        Raises:
            ValueError: If resource is empty or is not a single path segment
        """
        if not resource or '/' in resource or resource in ('.', '..'):
            raise ValueError(f"Invalid resource name: '{resource}'")

        if resource in READ_ONLY_PROVIDERS:
            return CollectionDescriptor(resource=resource, kind=resource)

        base = self.config.data_base_path.strip('/')
        base_path = f"{base}/{resource}" if base else resource
        return CollectionDescriptor(resource=resource, kind=FILES, base_path=base_path)

    def provider_for(self, resource: str) -> BaseProvider:
        provider = self._providers.get(resource)
        if provider is None:
            provider = self._build(self.describe(resource))
            self._providers[resource] = provider
        return provider

    def _build(self, descriptor: CollectionDescriptor) -> BaseProvider:
        if descriptor.kind == FILES:
            logger.debug(f"Resource {descriptor.resource} -> files under {descriptor.base_path}")
            return EntityProvider(
                self.client,
                self.config,
                descriptor.base_path,
                resource=descriptor.resource,
            )

        logger.debug(f"Resource {descriptor.resource} -> read-only {descriptor.kind}")
        return READ_ONLY_PROVIDERS[descriptor.kind](self.client, self.config, descriptor.resource)
