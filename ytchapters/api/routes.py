"""
API routes for the YouTube chapter generator application.
"""

import traceback
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from ytchapters.api.schemas import GenerateRequest, GenerateResponse, ErrorResponse
from ytchapters.core.pipeline import VideoInsightPipeline
from ytchapters.utils.error_handling import InvalidVideoUrlError, TranscriptNotFoundError
from ytchapters.utils.logger import logging

router = APIRouter(tags=["youtube"])


def get_pipeline(request: Request) -> VideoInsightPipeline:
    """Return the pipeline built at application startup."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise HTTPException(status_code=500, detail="Pipeline is not configured")
    return pipeline


@router.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "message": "Server is running"}


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(
    request: GenerateRequest,
    pipeline: VideoInsightPipeline = Depends(get_pipeline),
):
    """
    Generate timestamps and a summary for a YouTube video.

    - Returns 400 if the URL is missing or not a YouTube video URL
    - Returns 404 if the video has no transcript
    """
    if not request.video_url:
        raise HTTPException(status_code=400, detail="Video URL is required")

    try:
        result = await run_in_threadpool(pipeline.run, request.video_url)
    except InvalidVideoUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TranscriptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logging.error(f"Error generating content: {str(e)}")
        logging.error(traceback.format_exc())
        raise HTTPException(status_code=500, detail=f"Failed to process video: {str(e)}")

    return GenerateResponse(timestamps=result.timestamps, summary=result.summary)
