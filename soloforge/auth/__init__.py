"""
Supabase-backed authentication for the public site and the admin console.

Design goals:
- Supabase owns sessions; we only read the access token and sign out locally.
- Clients are constructed explicitly and handed to the flows that use them.
- Admin console access is gated by an email allowlist checked server-side.
"""
