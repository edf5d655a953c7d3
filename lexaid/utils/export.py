"""Document export.

None of these produce a real DOCX or PDF. The .docx file is an HTML
document that word processors import, and the PDF path is a page that
opens the browser's print dialog.
"""
import re
from datetime import date

from markupsafe import escape

from lexaid.utils.errors import ValidationError

TEXT_MIMETYPE = 'text/plain; charset=utf-8'
DOCX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'

_DOC_STYLE = (
    "body { font-family: 'Times New Roman', Times, serif; font-size: 12pt; line-height: 1.5; }\n"
    "pre { white-space: pre-wrap; word-wrap: break-word; "
    "font-family: 'Times New Roman', Times, serif; font-size: 12pt; }"
)

_PRINT_STYLE = (
    "body { font-family: 'Times New Roman', Times, serif; font-size: 12pt; line-height: 1.5; margin: 30px; }\n"
    "pre { white-space: pre-wrap; word-wrap: break-word; font-family: inherit; font-size: inherit; }"
)


def _require_content(content):
    if not content:
        raise ValidationError("Cannot export an empty document.")


def export_filename(document_name, extension, on_date=None):
    """e.g. Bail_Application_2024-05-01.txt"""
    on_date = on_date or date.today()
    safe_name = re.sub(r'\s+', '_', document_name)
    return f"{safe_name}_{on_date.isoformat()}.{extension}"


def to_text(content):
    """The text exactly as written, UTF-8 encoded"""
    _require_content(content)
    return content.encode('utf-8')


def to_pseudo_docx(content, title='Document'):
    """Wrap the text in a styled HTML document for a .docx download"""
    _require_content(content)
    html = (
        "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
        "xmlns:w='urn:schemas-microsoft-com:office:word' "
        "xmlns='http://www.w3.org/TR/REC-html40'>"
        f"<head><meta charset='utf-8'><title>{escape(title)}</title>"
        f"<style>\n{_DOC_STYLE}\n</style></head><body><pre>"
        f"{escape(content)}"
        "</pre></body></html>"
    )
    return html.encode('utf-8')


def to_print_page(content, title='Document'):
    """HTML page that shows the text and opens the print dialog on load"""
    _require_content(content)
    return (
        "<!DOCTYPE html><html><head><meta charset='utf-8'>"
        f"<title>{escape(title)}</title>"
        f"<style>\n{_PRINT_STYLE}\n</style>"
        "<script>window.onload = function() { window.print(); }</script>"
        f"</head><body><pre>{escape(content)}</pre></body></html>"
    )
