# Supabase table: bookings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- hotel_id: uuid (foreign key to hotels.id, nullable, ON DELETE SET NULL)
- check_in: date (not null)
- check_out: date (not null, > check_in) - departure day, not a booked night
- guests: integer (not null, >= 1)
- rooms: integer (not null, >= 1)
- total_price: numeric (not null) - nights * rooms * price_per_night at booking time
- status: text (not null, default: 'confirmed') - values: confirmed, cancelled, completed
- guest_name: text (nullable)
- guest_email: text (nullable)
- guest_phone: text (nullable)
- special_requests: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Two stays overlap when existing.check_in < new.check_out and
existing.check_out > new.check_in; cancelled bookings hold no rooms.
"""
