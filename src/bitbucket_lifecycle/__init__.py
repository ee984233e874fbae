"""Bitbucket lifecycle: render-time chat actions for Bitbucket Server repositories."""

__version__ = "0.1.0"
