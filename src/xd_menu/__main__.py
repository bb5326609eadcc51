"""Allow ``python -m xd_menu`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m xd_menu`` behaves identically to the ``xd`` console script.
"""

from __future__ import annotations

from xd_menu.cli.app import cli

if __name__ == "__main__":
    cli()
