"""
Utility Functions

This package contains helper functions for:
- auth_middleware: Authentication and validation decorators
- errors: Application errors and their HTTP status
- export: Text, .docx and print-to-PDF export
- forms: Drafting form fields and submitted values
- payments: Flutterwave callback confirmation
- timestamps: Server timestamps and subscription dates
"""
