"""
Compilation statistics reported by the bundling engine.

CompilationStatistics wraps the raw stats JSON webpack writes after a run.
It mirrors the two views webpack's own Stats object offers: the structured
report (``to_json``) and a short human-readable summary (``to_string``).
"""

import copy
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

SIZE_UNITS = ["bytes", "KiB", "MiB", "GiB"]

# Presets returning the full report; webpack only trims what it collects.
_FULL_PRESETS = {"verbose", "detailed", "normal", "summary"}

_BOLD_GREEN = "\x1b[1m\x1b[32m"
_BOLD = "\x1b[1m"
_RESET = "\x1b[39m\x1b[22m"


def format_size(size: Optional[float]) -> str:
    """Format a byte count the way webpack does, e.g. ``1.23 KiB``."""
    if not isinstance(size, (int, float)) or math.isnan(size):
        return "unknown size"
    if size <= 0:
        return "0 bytes"
    index = max(0, min(int(math.floor(math.log(size) / math.log(1024))), len(SIZE_UNITS) - 1))
    value = float(f"{size / 1024 ** index:.3g}")
    return f"{value:g} {SIZE_UNITS[index]}"


class CompilationStatistics:
    """
    Read-only view over the stats report of one (multi-)compilation.
    """

    def __init__(self, raw: Dict[str, Any]):
        self._raw = raw

    @property
    def children(self) -> List["CompilationStatistics"]:
        return [CompilationStatistics(child) for child in self._raw.get("children") or []]

    def has_errors(self) -> bool:
        return bool(self._raw.get("errors")) or any(c.has_errors() for c in self.children)

    def has_warnings(self) -> bool:
        return bool(self._raw.get("warnings")) or any(c.has_warnings() for c in self.children)

    def to_json(self, preset: str = "normal") -> Dict[str, Any]:
        """
        Return the structured report for a stats preset.

        Args:
            preset: "verbose", "detailed", "normal" and "summary" return the
                whole report; "errors-warnings" and "errors-only" keep just
                the messages; "none" returns an empty report

        Raises:
            ValueError: For an unknown preset
        """
        if preset in _FULL_PRESETS:
            return copy.deepcopy(self._raw)
        if preset == "errors-warnings":
            return self._messages_only(("errors", "warnings"))
        if preset == "errors-only":
            return self._messages_only(("errors",))
        if preset == "none":
            return {}
        raise ValueError(f"Unknown stats preset: {preset}")

    def _messages_only(self, keys) -> Dict[str, Any]:
        report: Dict[str, Any] = {key: copy.deepcopy(self._raw.get(key, [])) for key in keys}
        if self._raw.get("children"):
            report["children"] = [child._messages_only(keys) for child in self.children]
        return report

    def to_string(
        self,
        colors: bool = False,
        assets: bool = True,
        chunks: bool = False,
        entrypoints: bool = True,
        hash: bool = False,
        version: bool = False,
        modules: bool = False,
        built_at: bool = False,
        timings: bool = False,
    ) -> str:
        """Render the summary, including only the requested sections."""
        options = dict(
            colors=colors, assets=assets, chunks=chunks, entrypoints=entrypoints,
            hash=hash, version=version, modules=modules, built_at=built_at, timings=timings,
        )
        children = self.children
        if not children:
            return "\n".join(self._summary_lines(**options))

        sections = []
        for child in children:
            name = child._raw.get("name") or "compilation"
            header = f"{_BOLD}{name}{_RESET}:" if colors else f"{name}:"
            lines = child._summary_lines(**options)
            sections.append("\n".join([header] + [f"  {line}" for line in lines]))
        return "\n\n".join(sections)

    def _summary_lines(
        self, colors, assets, chunks, entrypoints, hash, version, modules, built_at, timings
    ) -> List[str]:
        raw = self._raw
        lines: List[str] = []

        def highlight(text: str) -> str:
            return f"{_BOLD_GREEN}{text}{_RESET}" if colors else text

        if hash and raw.get("hash"):
            lines.append(f"Hash: {raw['hash']}")
        if version and raw.get("version"):
            lines.append(f"Version: webpack {raw['version']}")
        if built_at and raw.get("builtAt"):
            built = datetime.fromtimestamp(raw["builtAt"] / 1000)
            lines.append(f"Built at: {built.strftime('%Y-%m-%d %H:%M:%S')}")
        if timings and raw.get("time") is not None:
            lines.append(f"Time: {raw['time']} ms")

        if assets:
            for asset in raw.get("assets") or []:
                line = f"asset {highlight(asset.get('name', ''))} {format_size(asset.get('size'))}"
                if asset.get("emitted"):
                    line += " [emitted]"
                if asset.get("isOverSizeLimit"):
                    line += " [big]"
                names = asset.get("chunkNames") or []
                if names:
                    line += f" (name: {', '.join(names)})"
                lines.append(line)

        if entrypoints:
            for name, entrypoint in (raw.get("entrypoints") or {}).items():
                files = []
                total = 0
                for asset in entrypoint.get("assets") or []:
                    # webpack 4 lists plain file names, webpack 5 lists objects.
                    if isinstance(asset, dict):
                        files.append(asset.get("name", ""))
                        total += asset.get("size") or 0
                    else:
                        files.append(str(asset))
                total = entrypoint.get("assetsSize", total)
                lines.append(
                    f"Entrypoint {highlight(name)} {format_size(total)} = {' '.join(files)}"
                )

        if chunks:
            for chunk in raw.get("chunks") or []:
                names = ", ".join(chunk.get("names") or [])
                files = " ".join(chunk.get("files") or [])
                flags = " [entry]" if chunk.get("entry") else ""
                lines.append(
                    f"chunk ({names}) {files} {format_size(chunk.get('size'))}{flags} [rendered]"
                )

        if modules:
            for module in raw.get("modules") or []:
                lines.append(f"{module.get('name', '')} {format_size(module.get('size'))} [built]")

        return lines
