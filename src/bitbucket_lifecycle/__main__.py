"""CLI entry point for bitbucket-lifecycle."""

from __future__ import annotations

from bitbucket_lifecycle.cli.commands.root import cli

if __name__ == "__main__":
    cli()
