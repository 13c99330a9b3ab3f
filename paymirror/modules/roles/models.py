# Supabase table: roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

roles:
- id: serial (primary key)
- name: text (not null, unique) - e.g., "admin", "member", "editor"

Referenced by users.role_id and rback_roles_pages.role_id.
"""
