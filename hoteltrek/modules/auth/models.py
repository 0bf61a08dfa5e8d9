# Supabase Auth
# Guests and admins are both Supabase Auth users; no custom tables are needed.
# Supabase Auth handles:
# - Registration and password hashing (auth.users table)
# - Login and JWT issuing / validation
# - The auth-provider part of the profile (user_metadata)

"""
Fields this application reads from auth.users:
- id: uuid
- email: text - owned by the auth provider, never changed by this service
- user_metadata.full_name: text - display name shown on the profile page
- user_metadata.avatar_url: text - profile picture URL
- app_metadata.role: text - "admin" grants access to /api/admin routes.
  app_metadata is set server-side and cannot be modified by users.
"""
