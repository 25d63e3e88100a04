from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from realcheck.models.detection_models import ErrorResponse, ImageSubmission, Verdict
from realcheck.services.detector_service import ImageDetector

router = APIRouter()


def get_detector(request: Request) -> ImageDetector:
    return request.app.state.detector


@router.post(
    "/analyze",
    response_model=Verdict,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    submission: ImageSubmission,
    detector: ImageDetector = Depends(get_detector),
):
    """
    Classify a data-URL image as AI-generated or a real photo.
    Returns the model's JSON verdict as-is.
    """
    verdict = await detector.analyze(submission)
    return JSONResponse(content=verdict)
