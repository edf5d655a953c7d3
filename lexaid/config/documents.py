"""Document type catalog.

Static registry of the legal documents LexAid can draft. Each entry lists
the form fields it needs and the exact document type string sent to the
drafting model.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldDefinition:
    key: str
    label: str
    placeholder: str
    component: str = 'input'  # input or textarea


@dataclass(frozen=True)
class DocumentTypeConfig:
    id: str
    name: str
    description: str
    icon: str
    fields: tuple
    ai_document_type: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'fields': list(self.fields),
            'ai_document_type': self.ai_document_type
        }


ALL_DOCUMENT_FIELDS_CONFIG = {
    'facts': FieldDefinition(
        'facts', 'Facts of the Case',
        'Enter the detailed facts, background, and relevant events...',
        component='textarea'
    ),
    'courtTypeAndLocation': FieldDefinition(
        'courtTypeAndLocation', 'Court Type and Location',
        'e.g., High Court of Lagos State, Ikeja Judicial Division'
    ),
    'partiesInvolved': FieldDefinition(
        'partiesInvolved', 'Parties Involved',
        'e.g., Plaintiff: Chief Adekunle Bello, Defendant: XYZ Limited'
    ),
    'matterCategory': FieldDefinition(
        'matterCategory', 'Category/Type of Matter',
        'e.g., Breach of Contract, Land Dispute, Matrimonial Causes'
    ),
    'stageOfProceedings': FieldDefinition(
        'stageOfProceedings', 'Stage of Proceedings',
        'e.g., Pre-action, Statement of Claim, Motion for Interlocutory Injunction'
    ),
}

_LITIGATION_FIELDS = ('facts', 'courtTypeAndLocation', 'partiesInvolved', 'matterCategory')
_PROCEEDINGS_FIELDS = _LITIGATION_FIELDS + ('stageOfProceedings',)
_SWORN_FIELDS = ('facts', 'partiesInvolved', 'matterCategory', 'courtTypeAndLocation', 'stageOfProceedings')

DOCUMENT_TYPES = (
    DocumentTypeConfig(
        'statement-of-claim', 'Statement of Claim',
        "Initiate a civil suit by outlining the plaintiff's case.",
        'file-text', _LITIGATION_FIELDS, 'Statement of Claim'
    ),
    DocumentTypeConfig(
        'statement-of-defence', 'Statement of Defence',
        "Respond to a statement of claim, outlining the defendant's case.",
        'shield', _LITIGATION_FIELDS, 'Statement of Defence'
    ),
    DocumentTypeConfig(
        'brief-of-argument', 'Brief of Argument',
        'Submit written arguments for appellate courts (Court of Appeal & Supreme Court).',
        'book-open', _PROCEEDINGS_FIELDS, 'Brief of Argument'
    ),
    DocumentTypeConfig(
        'final-written-address', 'Final Written Address',
        'Summarize arguments and evidence at the conclusion of a trial.',
        'file-text', _PROCEEDINGS_FIELDS, 'Final Written Address'
    ),
    DocumentTypeConfig(
        'bail-application', 'Bail Application',
        'Request pre-trial release for an accused person (Magistrate/High Court).',
        'gavel', _PROCEEDINGS_FIELDS, 'Bail Application'
    ),
    DocumentTypeConfig(
        'fundamental-rights', 'Enforcement of Fundamental Rights',
        'Apply to the court for the protection of fundamental human rights.',
        'scale', _LITIGATION_FIELDS, 'Application for Enforcement of Fundamental Rights'
    ),
    DocumentTypeConfig(
        'motion-on-notice', 'Motion on Notice',
        'Make a formal application or request to the court during proceedings.',
        'file-signature', _PROCEEDINGS_FIELDS, 'Motion on Notice'
    ),
    DocumentTypeConfig(
        'affidavit', 'Affidavit',
        'Provide a written, sworn statement of facts for court use.',
        'pencil-line', _SWORN_FIELDS, 'Affidavit'
    ),
    DocumentTypeConfig(
        'counter-affidavit', 'Counter-Affidavit',
        'Respond to an affidavit, challenging its factual assertions.',
        'pencil-line', _SWORN_FIELDS, 'Counter-Affidavit'
    ),
    DocumentTypeConfig(
        'legal-opinion', 'Legal Opinion',
        'Offer professional advice on a specific legal matter or question.',
        'book-marked', ('facts', 'matterCategory'), 'Legal Opinion'
    ),
    DocumentTypeConfig(
        'letter-of-demand', 'Letter of Demand',
        'Formally request payment or action from another party before litigation.',
        'mail', ('facts', 'partiesInvolved'), 'Letter of Demand'
    ),
    DocumentTypeConfig(
        'deed-contract', 'Deed / Contract',
        'Draft various binding legal agreements and formal documents.',
        'handshake', ('facts', 'partiesInvolved', 'matterCategory'), 'Deed or Contract'
    ),
    DocumentTypeConfig(
        'other-document', 'Other Legal Document',
        'For various other legal documents used in Nigerian legal practice.',
        'folder-archive', _PROCEEDINGS_FIELDS, 'General Legal Document'
    ),
)

_BY_ID = {doc.id: doc for doc in DOCUMENT_TYPES}


def get_document_type(document_type_id):
    """Look up a catalog entry by id. Returns None if not found."""
    return _BY_ID.get(document_type_id)


def search_document_types(term=''):
    """Filter the catalog by a case-insensitive match on name or description"""
    term = (term or '').strip().lower()
    if not term:
        return list(DOCUMENT_TYPES)

    return [
        doc for doc in DOCUMENT_TYPES
        if term in doc.name.lower() or term in doc.description.lower()
    ]
