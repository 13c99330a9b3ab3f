# Supabase Auth + local users table
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Credentials and tokens live in Supabase Auth (auth.users); Supabase issues and
verifies the bearer JWT. Authorization data lives in the public schema and is
keyed by the local integer user id, matched to the auth user by email:

users:
- id: serial (primary key)
- first_name: text (not null)
- last_name: text (not null)
- email: text (not null, unique) - same address as the auth.users row
- role_id: integer (foreign key to roles.id, not null)
"""
