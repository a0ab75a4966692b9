import os
from pathlib import Path


def get_cache_directory() -> Path:
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "netrate"
    else:
        cache_dir = Path.home() / ".cache/netrate"

    cache_dir.mkdir(mode=0o700, parents=True, exist_ok=True)

    return cache_dir
