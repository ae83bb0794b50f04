# partsdesk/api/catalog.py

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..services.csv_parser import parse_catalog_csv
from ..services.state import DeskState
from ..utils.logger import get_logger
from .deps import get_desk, require_user

log = get_logger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("")
def get_catalog(desk: DeskState = Depends(get_desk)):
    """
    Catalog preview (first rows only) plus the full count,
    the same view the master-data screen shows.
    """
    limit = desk.settings.catalog_preview
    return {
        "total": len(desk.catalog),
        "parts": list(desk.catalog.preview(limit)),
    }


@router.get("/{part_no}")
def get_part(part_no: str, desk: DeskState = Depends(get_desk)):
    part = desk.catalog.find_by_part_no(part_no)
    if part is None:
        raise HTTPException(status_code=404, detail=f"Part {part_no} not found")
    return part


@router.post("/import", dependencies=[Depends(require_user)])
def import_catalog(file: UploadFile = File(...), desk: DeskState = Depends(get_desk)):
    """
    Replace the whole catalog with the uploaded CSV.

    Malformed rows are skipped and bad numbers read as 0; duplicate
    part numbers are reported back but kept (lookups use the first).
    """
    raw = file.file.read()
    text = raw.decode("utf-8-sig", errors="replace")
    parts = parse_catalog_csv(text)
    duplicates = desk.catalog.replace_all(parts)
    log.info("catalog_imported", filename=file.filename, parts=len(parts), duplicates=len(duplicates))
    return {"imported": len(parts), "duplicates": duplicates}
