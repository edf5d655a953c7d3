"""
Gemini-backed drafting agents

- DraftingAgent: Drafts a complete legal document from the form values
- CitationAgent: Suggests Nigerian statutes and case law for a draft
"""
