"""Drafting form helpers shared by the draft page and the drafting API."""
from lexaid.config.documents import ALL_DOCUMENT_FIELDS_CONFIG

# Judgement drafting inputs. Not part of any catalog form, accepted when posted.
JUDGEMENT_FIELDS = (
    'issuesForDetermination',
    'summaryOfArgumentsPlaintiff',
    'summaryOfArgumentsDefendant',
    'analysisAndDecision',
)


def form_fields(document_type, field_definitions=None):
    """One field definition per key the document type declares, in order"""
    field_definitions = field_definitions or ALL_DOCUMENT_FIELDS_CONFIG
    return [field_definitions[key] for key in document_type.fields]


def collect_form_data(document_type, submitted):
    """Map each declared field key to its raw submitted value.

    Values are kept exactly as submitted. Declared fields that were not
    posted become "". Judgement fields are carried over only when present.
    """
    submitted = submitted or {}
    data = {}
    for key in document_type.fields:
        value = submitted.get(key)
        data[key] = value if isinstance(value, str) else ''

    for key in JUDGEMENT_FIELDS:
        value = submitted.get(key)
        if isinstance(value, str):
            data[key] = value

    return data
