"""
Seed Hotels Script
Populates the hotels table with a few sample properties for local development.
Existing hotels (matched by name and city) are updated instead of duplicated.

    python -m hoteltrek.scripts.seed_hotels
"""

from hoteltrek.database.supabase_client import get_service_supabase
from hoteltrek.modules.admin.schemas import HotelCreate
from supabase import Client
from typing import List
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_HOTELS: List[HotelCreate] = [
    HotelCreate(
        name="Harbour View Hotel",
        description="Waterfront rooms a short walk from the old town.",
        address="12 Quay Street",
        city="Lisbon",
        country="Portugal",
        price_per_night=120.0,
        total_rooms=40,
        amenities=["wifi", "breakfast", "rooftop bar"],
        latitude=38.7077,
        longitude=-9.1365,
    ),
    HotelCreate(
        name="Alpine Lodge",
        description="Family-run lodge at the foot of the slopes.",
        address="Bahnhofstrasse 3",
        city="Zermatt",
        country="Switzerland",
        price_per_night=260.0,
        total_rooms=18,
        amenities=["wifi", "spa", "ski storage"],
        latitude=46.0207,
        longitude=7.7491,
    ),
    HotelCreate(
        name="Central Station Inn",
        description="Simple, quiet rooms next to the main station.",
        address="1 Station Square",
        city="Amsterdam",
        country="Netherlands",
        price_per_night=95.0,
        total_rooms=60,
        amenities=["wifi", "24h reception"],
        latitude=52.3791,
        longitude=4.9003,
    ),
]


def seed_hotels(supabase: Client) -> int:
    """Insert or update the sample hotels"""
    logger.info("Seeding hotels...")
    created_count = 0
    updated_count = 0

    for hotel in SAMPLE_HOTELS:
        try:
            existing = supabase.table("hotels")\
                .select("id")\
                .eq("name", hotel.name)\
                .eq("city", hotel.city)\
                .execute()

            if existing.data:
                supabase.table("hotels")\
                    .update(hotel.model_dump())\
                    .eq("id", existing.data[0]["id"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated hotel: {hotel.name}")
            else:
                supabase.table("hotels").insert({**hotel.model_dump(), "image_urls": []}).execute()
                created_count += 1
                logger.debug(f"Created hotel: {hotel.name}")
        except Exception as e:
            logger.error(f"Error processing hotel {hotel.name}: {e}")

    logger.info(f"Hotels seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def main():
    seed_hotels(get_service_supabase())


if __name__ == "__main__":
    main()
