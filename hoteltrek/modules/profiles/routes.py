from fastapi import APIRouter, Depends, UploadFile, File
from hoteltrek.database.supabase_client import get_supabase, get_service_supabase
from hoteltrek.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from hoteltrek.modules.profiles.service import ProfileService
from hoteltrek.modules.uploads.service import UploadService, get_upload_service
from hoteltrek.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profile", tags=["profile"])


def get_profile_service(
    supabase: Client = Depends(get_supabase),
    service_client: Client = Depends(get_service_supabase),
) -> ProfileService:
    return ProfileService(supabase, service_client)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile"""
    return service.get_profile(user_data)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update name, phone, location or picture URL. Email cannot be changed here."""
    return service.update_profile(user_data, profile_data)


@router.post("/me/picture", response_model=ProfileResponse)
async def upload_profile_picture(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
    uploads: UploadService = Depends(get_upload_service)
):
    """
    Upload a profile picture. The image is validated (size, format, minimum
    dimensions), cropped to a square and downscaled before it is stored.
    """
    return await service.update_picture(user_data, file, uploads)
