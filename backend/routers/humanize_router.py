import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from models.database import get_db
from models import storage
from schemas import HumanizeRequest
from session import SessionContext, get_session_context
from services.humanize_service import HumanizationError, humanize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/humanize")


@router.post("")
def humanize_text(
    payload: HumanizeRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    options = payload.options
    try:
        result = humanize(payload.text, options)
    except HumanizationError:
        logger.exception("Error humanizing text")
        return JSONResponse(status_code=500, content={"message": "Error processing humanization request"})

    storage.create_humanized_text(
        db,
        user_id=ctx.user_id,
        original_text=payload.text,
        humanized_text=result.humanized_text,
        options=options.model_dump(by_alias=True, exclude_none=True),
        plagiarism_score=result.plagiarism_score,
        ai_detection=result.ai_detection,
    )

    return {
        "humanizedText": result.humanized_text,
        "plagiarismScore": result.plagiarism_score,
        "aiDetection": result.ai_detection,
    }


@router.get("/history")
def humanize_history(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return [record.to_dict() for record in storage.get_humanized_texts(db, ctx.user_id)]
