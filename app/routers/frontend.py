from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.config import Settings
from app.dependencies import get_settings
from app.errors import NotFoundError

router = APIRouter(include_in_schema=False)


def _resolve(static_dir: Path, full_path: str):
    """Return the static file for full_path, falling back to index.html.

    Paths that escape static_dir are treated as missing.
    """
    root = static_dir.resolve()
    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate
    index = root / "index.html"
    if index.is_file():
        return index
    return None


# Registered last: serves the single-page client for any GET no API route claimed
@router.get("/{full_path:path}")
def spa_fallback(full_path: str, settings: Settings = Depends(get_settings)):
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundError("Not found")
    target = _resolve(Path(settings.static_dir), full_path)
    if target is None:
        raise NotFoundError("Not found")
    return FileResponse(target)
