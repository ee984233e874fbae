"""Bitbucket Server adapters."""

from __future__ import annotations

from bitbucket_lifecycle.bitbucket.api import BitbucketApi
from bitbucket_lifecycle.bitbucket.errors import BitbucketApiError, classify_error, handle_error
from bitbucket_lifecycle.bitbucket.queries import BitbucketLifecycleQueries

__all__ = [
    "BitbucketApi",
    "BitbucketApiError",
    "BitbucketLifecycleQueries",
    "classify_error",
    "handle_error",
]
