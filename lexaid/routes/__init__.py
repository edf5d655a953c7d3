"""
API Routes

This package contains Flask blueprints for:
- auth: Authentication and profile settings
- documents: Document catalog, AI drafting, citations and export
- drafts, clauses, cases: Per-user saved records
- billing: Plans and the payment callback
"""
