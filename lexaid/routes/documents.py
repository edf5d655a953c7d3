import io
import logging

from flask import Blueprint, Response, current_app, jsonify, request, send_file

from lexaid.agents.citation_agent import CitationAgent
from lexaid.agents.drafting_agent import DraftingAgent, build_draft_request
from lexaid.config.documents import ALL_DOCUMENT_FIELDS_CONFIG, get_document_type, search_document_types
from lexaid.utils import export
from lexaid.utils.auth_middleware import login_required_api, validate_json_data
from lexaid.utils.errors import NotFoundError, ValidationError
from lexaid.utils.forms import collect_form_data, form_fields

logger = logging.getLogger(__name__)

documents_bp = Blueprint('documents', __name__)

NO_CITATIONS_MESSAGE = (
    "The AI could not find specific citations for this document at the moment. "
    "You can try again or manually add them."
)


def get_agents():
    """Get initialized agent instances"""
    api_key = current_app.config.get('GOOGLE_API_KEY')
    model_name = current_app.config.get('GEMINI_MODEL')

    return {
        'drafting': DraftingAgent(api_key, model_name),
        'citations': CitationAgent(api_key, model_name)
    }


def _document_type_or_404(document_type_id):
    document_type = get_document_type(document_type_id)
    if document_type is None:
        raise NotFoundError("Document type configuration not found.")
    return document_type


@documents_bp.route('/types', methods=['GET'])
def list_document_types():
    """Catalog entries, optionally filtered by a search term"""
    types = search_document_types(request.args.get('q', ''))
    return jsonify({
        'document_types': [doc.to_dict() for doc in types],
        'total': len(types)
    }), 200


@documents_bp.route('/types/<document_type_id>', methods=['GET'])
def get_document_type_detail(document_type_id):
    """A catalog entry with the form fields it needs"""
    document_type = _document_type_or_404(document_type_id)

    data = document_type.to_dict()
    data['form_fields'] = [
        {
            'key': field.key,
            'label': field.label,
            'placeholder': field.placeholder,
            'component': field.component
        }
        for field in form_fields(document_type, ALL_DOCUMENT_FIELDS_CONFIG)
    ]
    return jsonify(data), 200


@documents_bp.route('/<document_type_id>/draft', methods=['POST'])
@login_required_api
def draft_document(document_type_id):
    """Draft a document of the given type from the submitted form values"""
    document_type = _document_type_or_404(document_type_id)
    form_data = collect_form_data(document_type, request.get_json(silent=True))
    draft_input = build_draft_request(document_type, form_data)

    agent = get_agents()['drafting']
    result = agent.draft_document(draft_input)

    return jsonify({
        'message': 'Your legal document has been generated successfully.',
        'document_type': document_type.name,
        'draftDocument': result['draftDocument']
    }), 200


@documents_bp.route('/citations', methods=['POST'])
@login_required_api
@validate_json_data(['documentContent'])
def suggest_citations():
    """Suggest citations for a drafted or edited document"""
    content = request.get_json()['documentContent']
    if not isinstance(content, str):
        raise ValidationError("documentContent must be text")

    agent = get_agents()['citations']
    citations = agent.suggest_citations(content)['citations']

    return jsonify({
        'citations': citations,
        'message': 'Relevant citations have been generated.' if citations else NO_CITATIONS_MESSAGE
    }), 200


@documents_bp.route('/<document_type_id>/export/<export_format>', methods=['POST'])
@login_required_api
@validate_json_data(['content'])
def export_document(document_type_id, export_format):
    """Export document text as .txt, pseudo-.docx, or a print-to-PDF page"""
    document_type = _document_type_or_404(document_type_id)
    content = request.get_json()['content']
    if not isinstance(content, str):
        raise ValidationError("content must be text")

    if export_format == 'txt':
        return send_file(
            io.BytesIO(export.to_text(content)),
            mimetype=export.TEXT_MIMETYPE,
            as_attachment=True,
            download_name=export.export_filename(document_type.name, 'txt')
        )

    if export_format == 'docx':
        return send_file(
            io.BytesIO(export.to_pseudo_docx(content, title=document_type.name)),
            mimetype=export.DOCX_MIMETYPE,
            as_attachment=True,
            download_name=export.export_filename(document_type.name, 'docx')
        )

    if export_format == 'pdf':
        return Response(export.to_print_page(content, title=document_type.name), mimetype='text/html')

    raise NotFoundError(f"Unknown export format: {export_format}")
