# Supabase tables: rback_pages, rback_roles_pages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

rback_pages:
- id: serial (primary key)
- pagename: text (not null, unique) - e.g., "Invoices List"
- pageurl: text (not null, unique) - e.g., "/invoices"
- group_name: text (default: 'General') - sidebar grouping, e.g., "Invoices"

rback_roles_pages:
- id: serial (primary key)
- role_id: integer (foreign key to roles.id, not null)
- userid: integer (foreign key to users.id, nullable) - null means role-wide
- page_id: integer (not null, indexed) - no foreign key; deleting a page orphans its rows
- isview: boolean (default: false)
- isadd: boolean (default: false)
- isedit: boolean (default: false)
- isdelete: boolean (default: false)
- isupdate: boolean (default: false)
- filters: jsonb (nullable) - opaque row-level predicate, interpreted by callers
- indexes on role_id, userid, page_id
- no unique constraint on (role_id, userid, page_id)
"""
