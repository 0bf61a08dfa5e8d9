# Supabase table: hotels
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- address: text (nullable)
- city: text (not null)
- country: text (nullable)
- price_per_night: numeric (not null, > 0)
- total_rooms: integer (not null, >= 1)
- amenities: text[] (default: '{}')
- image_urls: text[] (default: '{}') - /uploads/... or S3 URLs
- latitude: double precision (nullable) - set through the map routes
- longitude: double precision (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

bookings.hotel_id and reviews.hotel_id reference hotels.id; reviews are
removed together with their hotel, past bookings keep a dangling hotel_id
(ON DELETE SET NULL).
"""
