"""
POST /analyze
=============
Runs the bug-report-to-fix pipeline for one report and returns the
ResultEnvelope the dashboard renders.

Request:  {"input": "<bug text or GitHub issue URL>"}
Success:  200 ResultEnvelope (camelCase keys)
Failure:  400 {"error": ...} for missing / non-string / blank input
          500 {"error": ...} for a missing LLM key or any pipeline failure

Successful runs are recorded in the history store.
"""
import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from bugsquash.agents.orchestrator import PipelineOrchestrator
from bugsquash.core.errors import BugSquashError
from bugsquash.models.envelope import ResultEnvelope
from bugsquash.services.history_store import get_history_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pipeline"])


class AnalyzeRequest(BaseModel):
    # Left untyped so a wrong type reaches the pipeline and becomes a 400
    input: Any = None


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/analyze", response_model=ResultEnvelope)
async def analyze(request: Optional[AnalyzeRequest] = None):
    """
    Analyze a bug report, generate a fix, and review it.
    """
    raw_input = request.input if request is not None else None
    preview = raw_input[:80] if isinstance(raw_input, str) else type(raw_input).__name__
    logger.info(f"[API] New analysis request: {preview!r}")

    try:
        orchestrator = PipelineOrchestrator()
        envelope = await orchestrator.run(raw_input)
    except BugSquashError as exc:
        level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(level, f"[API] Analysis rejected ({exc.status_code}): {exc.message}")
        return error_response(exc.status_code, exc.message)
    except Exception as exc:
        logger.error(f"[API] FATAL: Analysis failed: {str(exc)}", exc_info=True)
        return error_response(500, str(exc) or "Analysis failed")

    try:
        await asyncio.to_thread(
            get_history_store().add,
            input=raw_input,
            issue=envelope.issue,
            root_cause=envelope.root_cause,
            severity=envelope.severity,
            score=envelope.review.score,
        )
    except OSError as exc:
        logger.warning(f"[API] Could not record history: {exc}")

    return envelope
