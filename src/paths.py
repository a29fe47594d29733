from __future__ import annotations

from pathlib import Path

CONFIG_FILENAME = "config.yaml"
_ROOT_MARKERS = (CONFIG_FILENAME, ".git")


def _search_up(start: Path) -> Path | None:
    if start.is_file():
        start = start.parent
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return None


def get_repo_root() -> Path:
    """Return repo root by searching upwards for `config.yaml` or `.git`."""
    # Working directory first, then this file (useful when imported from elsewhere).
    for start in (Path.cwd().resolve(), Path(__file__).resolve().parent):
        found = _search_up(start)
        if found is not None:
            return found
    raise FileNotFoundError("Could not locate repo root (expected `config.yaml` or `.git`).")


def resolve_config_path(path: Path | str | None = None) -> Path:
    """Resolve a config path; relative paths (and the default) are anchored at the repo root."""
    if path is None:
        return (get_repo_root() / CONFIG_FILENAME).resolve()
    p = Path(path)
    if p.is_absolute():
        return p
    return (get_repo_root() / p).resolve()
