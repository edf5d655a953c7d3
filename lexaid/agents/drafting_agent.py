import logging
from dataclasses import dataclass
from typing import Optional

import google.generativeai as genai

from lexaid.utils.errors import AIServiceError, ServiceUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.5-flash'


@dataclass
class DraftLegalDocumentInput:
    """Input for the drafting model.

    ``document_type``, ``facts`` and ``parties_involved`` are always sent.
    Every other member is optional and left out of the request when None.
    """
    document_type: str
    facts: str = ''
    parties_involved: str = ''
    court_type_and_location: Optional[str] = None
    matter_category: Optional[str] = None
    stage_of_proceedings: Optional[str] = None
    issues_for_determination: Optional[str] = None
    summary_of_arguments_plaintiff: Optional[str] = None
    summary_of_arguments_defendant: Optional[str] = None
    analysis_and_decision: Optional[str] = None

    REQUIRED = (
        ('documentType', 'document_type'),
        ('facts', 'facts'),
        ('partiesInvolved', 'parties_involved'),
    )
    OPTIONAL = (
        ('courtTypeAndLocation', 'court_type_and_location'),
        ('matterCategory', 'matter_category'),
        ('stageOfProceedings', 'stage_of_proceedings'),
        ('issuesForDetermination', 'issues_for_determination'),
        ('summaryOfArgumentsPlaintiff', 'summary_of_arguments_plaintiff'),
        ('summaryOfArgumentsDefendant', 'summary_of_arguments_defendant'),
        ('analysisAndDecision', 'analysis_and_decision'),
    )

    def to_request(self):
        """Serialize to the wire shape, omitting optional members that are None"""
        request = {key: getattr(self, attr) or '' for key, attr in self.REQUIRED}
        for key, attr in self.OPTIONAL:
            value = getattr(self, attr)
            if value is not None:
                request[key] = value
        return request


def build_draft_request(document_type, form_data):
    """Normalize drafting form values into a DraftLegalDocumentInput.

    Catalog form fields default to "" so they are always sent; judgement
    fields stay None unless the form carried them.
    """
    return DraftLegalDocumentInput(
        document_type=document_type.ai_document_type,
        facts=form_data.get('facts') or '',
        parties_involved=form_data.get('partiesInvolved') or '',
        court_type_and_location=form_data.get('courtTypeAndLocation') or '',
        matter_category=form_data.get('matterCategory') or '',
        stage_of_proceedings=form_data.get('stageOfProceedings') or '',
        issues_for_determination=form_data.get('issuesForDetermination'),
        summary_of_arguments_plaintiff=form_data.get('summaryOfArgumentsPlaintiff'),
        summary_of_arguments_defendant=form_data.get('summaryOfArgumentsDefendant'),
        analysis_and_decision=form_data.get('analysisAndDecision'),
    )


class DraftingAgent:
    def __init__(self, api_key, model_name=DEFAULT_MODEL):
        if not api_key:
            raise ServiceUnavailableError("Google API key not configured")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)

    def draft_document(self, draft_input):
        """Draft a complete legal document. Returns {'draftDocument': text}."""
        prompt = self._build_prompt(draft_input.to_request())
        logger.info("Drafting %s", draft_input.document_type)

        try:
            response = self.model.generate_content(prompt)
            text = response.text
        except Exception as e:
            logger.exception("Drafting request failed")
            raise AIServiceError(f"Could not generate the document: {e}") from e

        if not (text or '').strip():
            raise AIServiceError("The drafting model returned an empty document.")

        return {'draftDocument': text}

    def _build_prompt(self, request):
        """Fill the drafting template, skipping optional lines with no value"""

        def line(label, key):
            value = request.get(key)
            return f"{label}: {value}\n" if value else ""

        judgement = (
            line("Issues for Determination (for Judgement)", 'issuesForDetermination')
            + line("Summary of Claimant/Applicant's Arguments (for Judgement)", 'summaryOfArgumentsPlaintiff')
            + line("Summary of Defendant/Respondent's Arguments (for Judgement)", 'summaryOfArgumentsDefendant')
            + line("Analysis and Decision to be Detailed (for Judgement)", 'analysisAndDecision')
        )

        return (
            "You are an expert Nigerian legal practitioner. Based on the information provided, "
            "draft a complete legal document, properly formatted, using correct legal language "
            "and structure relevant to Nigerian courts or legal practice.\n\n"
            f"Document Type: {request['documentType']}\n"
            f"Facts of the case/matter: {request['facts']}\n"
            + line("Court type and location", 'courtTypeAndLocation')
            + f"Parties involved: {request['partiesInvolved']}\n"
            + line("Category/type of matter", 'matterCategory')
            + line("Stage of the proceedings", 'stageOfProceedings')
            + ("\n" + judgement if judgement else "")
            + "\nDraft the legal document:\n"
        )
