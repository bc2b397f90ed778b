"""Rich/JSON output dispatch.

The CLI renders ServiceResult for humans (Rich tables and panels),
for scripts (``--quiet``: keys only), or for machines (``--json``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bundlevalley.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from bundlevalley.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags copied from the CLI settings."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet; quiet wins over the Rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
