"""
Scoring routes for the Classi API.

Scores uploaded candidate workbooks against the reference answer tree.
The reference tree is built once and shared read-only by all requests.
"""
import logging
import threading
from typing import Optional
from zipfile import BadZipFile

from fastapi import APIRouter, File, HTTPException, UploadFile
from openpyxl.utils.exceptions import InvalidFileException

from config import settings
from core import ClassificationError, ClassificationTree
from services.scoring import format_report, load_candidate_tree, load_reference_tree, score_trees
from api.schemas import ScoreResponse

logger = logging.getLogger(__name__)

router = APIRouter()

_reference_tree: Optional[ClassificationTree] = None
_reference_lock = threading.Lock()


def get_reference_tree() -> ClassificationTree:
    """Load the reference tree on first use, then return the cached one."""
    global _reference_tree

    with _reference_lock:
        if _reference_tree is None:
            try:
                _reference_tree = load_reference_tree()
            except FileNotFoundError:
                logger.error(f"Reference file not found: {settings.REFERENCE_FILE}")
                raise HTTPException(status_code=503, detail="Reference answer file not found")
            except ClassificationError as e:
                logger.error(f"Failed to load reference: {e}")
                raise HTTPException(status_code=503, detail=f"Reference unavailable: {e}")
            except (OSError, BadZipFile, InvalidFileException, KeyError, ValueError) as e:
                # decrypted, but not a readable workbook
                logger.error(f"Failed to read reference {settings.REFERENCE_FILE}: {e}")
                raise HTTPException(status_code=503, detail=f"Reference unreadable: {e}")
        return _reference_tree


def peek_reference_tree() -> Optional[ClassificationTree]:
    """The cached reference tree, without triggering a load."""
    return _reference_tree


def reset_reference_tree(tree: Optional[ClassificationTree] = None):
    """Replace (or clear) the cached reference tree."""
    global _reference_tree
    with _reference_lock:
        _reference_tree = tree


@router.post("", response_model=ScoreResponse)
def score_candidate(candidate_file: UploadFile = File(...)):
    """
    Score an uploaded candidate .xlsx against the reference.

    Plain def: decryption and workbook parsing block, so FastAPI runs this
    in its threadpool.
    """
    if not candidate_file.filename or not candidate_file.filename.lower().endswith('.xlsx'):
        raise HTTPException(status_code=400, detail="Candidate file must be .xlsx")

    content = candidate_file.file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="Candidate file too large")

    reference = get_reference_tree()

    try:
        candidate = load_candidate_tree(content)
        result = score_trees(reference, candidate)
    except ClassificationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (BadZipFile, InvalidFileException, KeyError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid workbook: {e}")

    logger.info(
        f"Scored {candidate_file.filename}: {result.report.overall_accuracy:.2f}% "
        f"over {result.report.total} unit(s)"
    )

    return ScoreResponse(
        filename=candidate_file.filename,
        accuracy=result.report.to_dict(),
        diff=[unit.to_dict() for unit in result.diff],
        report=format_report(result.report),
    )
