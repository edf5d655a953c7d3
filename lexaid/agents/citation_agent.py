import logging
import re

import google.generativeai as genai

from lexaid.agents.drafting_agent import DEFAULT_MODEL
from lexaid.utils.errors import AIServiceError, ServiceUnavailableError, ValidationError

logger = logging.getLogger(__name__)

_BULLET = re.compile(r'^\s*(?:[-•*]|\d+[.)])\s+')


class CitationAgent:
    def __init__(self, api_key, model_name=DEFAULT_MODEL):
        if not api_key:
            raise ServiceUnavailableError("Google API key not configured")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)

    def suggest_citations(self, document_content):
        """Suggest Nigerian legal citations for a document. Returns {'citations': [...]}."""
        if not document_content or not document_content.strip():
            raise ValidationError("Please draft or edit a document first to suggest citations.")

        prompt = f"""
        You are a Nigerian legal expert. Given the following legal document content, suggest relevant
        legal citations from Nigerian law that could support the arguments or statements made.

        List one citation per line, each line starting with "- ".
        If no citation applies, respond with NONE.

        Document Content: {document_content}
        """

        try:
            response = self.model.generate_content(prompt)
            response_text = response.text
        except Exception as e:
            logger.exception("Citation request failed")
            raise AIServiceError(f"Could not generate citations: {e}") from e

        citations = self._parse_citations(response_text)
        logger.info("Suggested %d citations", len(citations))
        return {'citations': citations}

    def _parse_citations(self, response_text):
        """Pull bulleted or numbered lines out of the model response, in order"""
        citations = []
        for line in response_text.split('\n'):
            if not _BULLET.match(line):
                continue
            citation = _BULLET.sub('', line, count=1).strip()
            if citation and citation not in citations:
                citations.append(citation)
        return citations
