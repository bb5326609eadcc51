"""xd-menu — interactive command launcher driven by a menu tree.

Renders a YAML-defined tree of actions through dmenu (or a terminal
picker), substitutes captured input into shell templates and runs them.
"""

from xd_menu.version import __version__

__all__: list[str] = ["__version__"]
