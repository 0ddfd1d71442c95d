"""Photo upload evaluation API endpoints."""
from fastapi import APIRouter, Depends

from facematch.api.dependencies import get_photo_upload_service
from facematch.api.models.upload import NoPartnerEvaluationRequest, PartnerEvaluationRequest
from facematch.domain.value_objects.decision import NoPartnerUploadDecision, PhotoUploadAnalysis
from facematch.services.photo_upload import PhotoUploadService

router = APIRouter(
    responses={422: {"description": "Invalid request"}}
)


@router.post(
    "/evaluate",
    response_model=PhotoUploadAnalysis,
    summary="Evaluate a photo upload for a partner",
    description=(
        "Compares the uploaded face with the partner's photos and with every other "
        "partner's photos, and says whether to proceed or warn."
    ),
)
async def evaluate_for_partner(
    request: PartnerEvaluationRequest,
    service: PhotoUploadService = Depends(get_photo_upload_service),
) -> PhotoUploadAnalysis:
    return service.evaluate_for_partner(
        request.descriptor,
        request.partner_id,
        request.photos,
        exclude_photo_id=request.exclude_photo_id,
        partner_names=request.partner_names,
        threshold=request.threshold,
    )


@router.post(
    "/evaluate-without-partner",
    response_model=NoPartnerUploadDecision,
    summary="Evaluate a photo upload with no partner selected",
    description="Checks the uploaded face against all partners: create a new partner or review matches.",
)
async def evaluate_without_partner(
    request: NoPartnerEvaluationRequest,
    service: PhotoUploadService = Depends(get_photo_upload_service),
) -> NoPartnerUploadDecision:
    return service.evaluate_without_partner(
        request.descriptor,
        request.photos,
        partner_names=request.partner_names,
        threshold=request.threshold,
    )
