# Supabase table: user_profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, references auth.users.id)
- phone: text (nullable)
- location: text (nullable)
- photo_url: text (nullable) - mirror of the auth provider's avatar_url
- public_id: text (nullable) - storage id of the last uploaded profile picture
- last_updated: timestamp (nullable)

The display name, email and avatar URL are owned by Supabase Auth
(auth.users.user_metadata / auth.users.email). This table only keeps the
fields the auth provider has no place for.
"""
