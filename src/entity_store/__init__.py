"""Entity store built on a GitLab repository.

This package makes a repository behave like a paginated, atomically
mutable document store: directory trees become collections, JSON files
become entities and every mutation becomes one commit.
"""

from .codec import EntityCodec
from .commit_batcher import CommitBatcher
from .data_provider import DataProvider
from .dispatcher import ResourceDispatcher
from .entity_provider import EntityProvider
from .models import (
    CollectionDescriptor,
    ListResult,
    MutationIntent,
    ProviderConfig,
)
from .readonly_providers import BranchProvider, CommitProvider, PipelineProvider
from .tree_aggregator import TreeAggregator

__all__ = [
    'EntityCodec',
    'CommitBatcher',
    'DataProvider',
    'ResourceDispatcher',
    'EntityProvider',
    'CollectionDescriptor',
    'ListResult',
    'MutationIntent',
    'ProviderConfig',
    'BranchProvider',
    'CommitProvider',
    'PipelineProvider',
    'TreeAggregator',
]
