"""
Database Models

This package contains MongoDB model classes for:
- User: Authentication, profile settings and subscription
- Draft: Saved document drafts
- Clause: Reusable clause library
- Case: Case files with linked drafts
"""
