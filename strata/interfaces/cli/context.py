"""Shared helpers for composing CLI command contexts.

Every command works on a freshly bootstrapped ``Strata`` context for the
project root given on the command line (or ``$STRATA_ROOT``).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click

from strata.app import Strata, StrataError
from strata.app.config import resolve_root


@dataclass(frozen=True)
class CLIContext:
    """Container for the options shared by all commands."""

    root: Path

    def strata(self, *, run: bool = False) -> Strata:
        """Return an initialized (and optionally running) context.

        Bootstrap errors are reported as click errors so the command exits
        with a readable message instead of a traceback.
        """
        strata = Strata(self.root, cli=True)
        try:
            if run:
                strata.run()
            else:
                strata.init()
        except StrataError as exc:
            raise click.ClickException(str(exc)) from exc
        return strata


def build_cli_context(root: str | Path | None = None) -> CLIContext:
    return CLIContext(root=resolve_root(root))
