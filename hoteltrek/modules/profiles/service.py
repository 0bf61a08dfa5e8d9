from supabase import Client
from hoteltrek.config import settings
from hoteltrek.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from hoteltrek.modules.uploads.images import ImageRules
from hoteltrek.modules.uploads.service import UploadService
from typing import Dict, Any, Optional
from fastapi import HTTPException, UploadFile
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Guest"


def profile_image_rules() -> ImageRules:
    return ImageRules(
        max_bytes=settings.profile_image_max_bytes,
        allowed_formats=settings.get_profile_image_formats(),
        min_size=settings.profile_image_min_size,
        max_size=settings.profile_image_max_size,
        square=True,
    )


class ProfileService:
    """
    Profile data is split between the auth provider (display name, email,
    avatar URL) and the user_profiles table (phone, location, picture id).
    Writes go to the auth provider first; the table is only touched once
    that succeeded.
    """

    def __init__(self, supabase: Client, service_client: Client):
        self.supabase = supabase
        self.service_client = service_client

    def _get_auth_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.service_client.auth.admin.get_user_by_id(user_data["id"])
        except Exception as e:
            logger.warning("Could not refresh auth user %s, using token data: %s", user_data["id"], e)
            return user_data
        if not response or not response.user:
            return user_data
        user = response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
        }

    def _get_row(self, user_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            return {}
        return result.data

    def _build_response(self, auth_user: Dict[str, Any], row: Dict[str, Any]) -> ProfileResponse:
        metadata = auth_user.get("user_metadata") or {}
        return ProfileResponse(
            id=auth_user["id"],
            name=metadata.get("full_name") or DEFAULT_DISPLAY_NAME,
            email=auth_user.get("email") or "",
            phone=row.get("phone") or "",
            location=row.get("location") or "",
            profile_picture=metadata.get("avatar_url") or row.get("photo_url") or "",
            public_id=row.get("public_id"),
            last_updated=row.get("last_updated"),
        )

    def _update_auth_profile(self, auth_user: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
        """Push display name / avatar changes to the auth provider and return the new metadata."""
        metadata = {**(auth_user.get("user_metadata") or {}), **changes}
        try:
            response = self.service_client.auth.admin.update_user_by_id(
                auth_user["id"],
                {"user_metadata": metadata}
            )
        except Exception as e:
            logger.error(f"Error updating auth profile for {auth_user['id']}: {str(e)}")
            raise HTTPException(status_code=502, detail="Failed to update auth profile")
        if not response or not response.user:
            raise HTTPException(status_code=404, detail="User not found")
        return response.user.user_metadata or metadata

    def _save_row(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        row = {
            "id": user_id,
            **fields,
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = self.supabase.table("user_profiles").upsert(row).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save profile")
        return result.data[0]

    def get_profile(self, user_data: Dict[str, Any]) -> ProfileResponse:
        """Merge the auth provider profile with the stored auxiliary fields"""
        auth_user = self._get_auth_user(user_data)
        return self._build_response(auth_user, self._get_row(user_data["id"]))

    def update_profile(self, user_data: Dict[str, Any], profile_data: ProfileUpdate) -> ProfileResponse:
        """Save edited profile fields"""
        auth_user = self._get_auth_user(user_data)
        row = self._get_row(user_data["id"])

        auth_changes = {}
        if profile_data.name is not None:
            auth_changes["full_name"] = profile_data.name
        if profile_data.profile_picture is not None:
            auth_changes["avatar_url"] = profile_data.profile_picture
        if auth_changes:
            auth_user = {**auth_user, "user_metadata": self._update_auth_profile(auth_user, auth_changes)}

        fields = {
            "phone": row.get("phone"),
            "location": row.get("location"),
            "photo_url": row.get("photo_url"),
            "public_id": row.get("public_id"),
        }
        if profile_data.phone is not None:
            fields["phone"] = profile_data.phone
        if profile_data.location is not None:
            fields["location"] = profile_data.location
        if profile_data.profile_picture is not None and profile_data.profile_picture != row.get("photo_url"):
            # public_id names an uploaded asset; a pasted URL has none
            fields["photo_url"] = profile_data.profile_picture
            fields["public_id"] = None
        saved = self._save_row(user_data["id"], fields)
        logger.info("Updated profile for user %s", user_data["id"])
        return self._build_response(auth_user, saved)

    async def update_picture(
        self,
        user_data: Dict[str, Any],
        file: UploadFile,
        uploads: UploadService,
    ) -> ProfileResponse:
        """Store a new profile picture and point both profile halves at it"""
        stored = await uploads.store_image(file, settings.profile_image_folder, profile_image_rules())
        auth_user = self._get_auth_user(user_data)
        row = self._get_row(user_data["id"])
        previous_url: Optional[str] = row.get("photo_url")

        try:
            metadata = self._update_auth_profile(auth_user, {"avatar_url": stored.url})
        except HTTPException:
            uploads.delete_by_url(stored.url)
            raise
        auth_user = {**auth_user, "user_metadata": metadata}
        saved = self._save_row(user_data["id"], {
            "phone": row.get("phone"),
            "location": row.get("location"),
            "photo_url": stored.url,
            "public_id": stored.public_id,
        })
        if previous_url and previous_url != stored.url:
            uploads.delete_by_url(previous_url)
        logger.info("Updated profile picture for user %s (%s)", user_data["id"], stored.public_id)
        return self._build_response(auth_user, saved)
