"""Subcommand modules for bundlevalley.

``COMMANDS`` maps each subcommand to its import path.  The root
:class:`~bundlevalley.commands._base.BvGroup` imports a module only
when its command is looked up.
"""

from __future__ import annotations

# Table order is the order shown in ``bundlevalley --help``.
COMMANDS: dict[str, str] = {
    "init": "bundlevalley.commands.init_cmd:init_cmd",
    "bundles": "bundlevalley.commands.bundles:bundles",
    "rooms": "bundlevalley.commands.rooms:rooms",
    "mark": "bundlevalley.commands.mark:mark",
    "stats": "bundlevalley.commands.stats:stats",
}
