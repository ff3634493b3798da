"""Vocabulary document retrieval."""

from .fetcher import FetchedResource, FetcherConfig, ResourceFetcher

__all__ = ["FetchedResource", "FetcherConfig", "ResourceFetcher"]
