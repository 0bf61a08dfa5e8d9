# Supabase table: reviews
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- hotel_id: uuid (foreign key to hotels.id, not null, ON DELETE CASCADE)
- user_id: uuid (foreign key to auth.users.id, not null)
- user_name: text (not null) - display name at the time of writing
- rating: smallint (not null, 1..5)
- comment: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

unique (hotel_id, user_id)
"""
