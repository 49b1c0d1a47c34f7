"""Materialises a ``ScaffoldPlan`` on disk."""

from __future__ import annotations

import asyncio
from pathlib import Path

from .models import ScaffoldPlan


class PlanWriter:
    """Writes every file of a plan below an output directory.

    Existing files are left alone unless ``overwrite`` is set; the check runs
    for the whole plan before anything is written, so a refused run leaves the
    output directory untouched.
    """

    def __init__(self, overwrite: bool = False) -> None:
        self.overwrite = overwrite

    def conflicts(self, plan: ScaffoldPlan, output_dir: str | Path) -> list[Path]:
        """Return the planned paths that already exist under *output_dir*."""
        root = Path(output_dir)
        return [root / f.path for f in plan.files if (root / f.path).exists()]

    async def write(self, plan: ScaffoldPlan, output_dir: str | Path) -> list[Path]:
        """Write *plan* below *output_dir*.

        Returns:
            The written paths, in plan order.

        Raises:
            FileExistsError: If a planned file exists and ``overwrite`` is off.
        """
        root = Path(output_dir)
        if not self.overwrite:
            existing = await asyncio.to_thread(self.conflicts, plan, root)
            if existing:
                listed = ", ".join(str(p) for p in existing)
                raise FileExistsError(
                    f"{len(existing)} planned file(s) already exist: {listed}"
                )

        written: list[Path] = []
        for planned in plan.files:
            out = root / planned.path
            await asyncio.to_thread(_write_file, out, planned.content)
            written.append(out)
        return written


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
