"""
Licenses module - client license management.

This module handles:
- LicenseRecord entity and the lifecycle engine
- Client-facing validation with auto-registration
- Admin operations (create, delete, extend, set status, list)
"""
