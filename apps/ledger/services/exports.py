"""
Report export.

Every report is an ordered header list plus rows of cells aligned to it.
It can be written out as CSV text or as a printable HTML document that
the browser prints to PDF.
"""

import csv
import io
import re
from typing import Iterable, Sequence

from django.http import HttpResponse
from django.template.loader import render_to_string
from django.utils.html import escape

from .exceptions import UnsupportedExportFormatError

EXPORT_FORMATS = ('csv', 'pdf')

TITLE_TAG = re.compile(r'<title>.*?</title>', re.IGNORECASE | re.DOTALL)
HEAD_TAG = re.compile(r'<head[^>]*>', re.IGNORECASE)


def to_csv(headers: Sequence, rows: Iterable[Sequence]) -> str:
    """
    CSV text with every cell quoted and embedded quotes doubled.

    >>> to_csv(['Name', 'Amount'], [['a,b', 10]])
    '"Name","Amount"\\n"a,b","10"\\n'
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def to_printable_document(title: str, headers: Sequence, rows: Iterable[Sequence]) -> str:
    """Render a titled table as a standalone printable HTML page."""
    return render_to_string('exports/printable_table.html', {
        'title': title,
        'headers': list(headers),
        'rows': [list(row) for row in rows],
    })


def printable_html_document(raw_html: str, title: str) -> str:
    """
    Make an already rendered HTML document printable under a title.

    The title becomes the default file name when printing to PDF.
    """
    title_tag = f'<title>{escape(title)}</title>'

    if TITLE_TAG.search(raw_html):
        return TITLE_TAG.sub(lambda _: title_tag, raw_html, count=1)

    head = HEAD_TAG.search(raw_html)
    if head:
        return raw_html[:head.end()] + title_tag + raw_html[head.end():]

    return f'<!DOCTYPE html><html><head>{title_tag}</head><body>{raw_html}</body></html>'


def csv_response(content: str, filename: str) -> HttpResponse:
    response = HttpResponse(content, content_type='text/csv; charset=utf-8-sig')
    response['Content-Disposition'] = f'attachment; filename="{filename}.csv"'
    return response


def html_response(content: str) -> HttpResponse:
    return HttpResponse(content, content_type='text/html; charset=utf-8')


def export_response(export_format: str, *, title: str, headers: Sequence, rows: Iterable[Sequence]) -> HttpResponse:
    """
    HTTP response for a report in the requested format.

    Args:
        export_format: 'csv' or 'pdf' (printable HTML)
        title: Report title, also the CSV file name with spaces as underscores

    Raises:
        UnsupportedExportFormatError: For any other format
    """
    if export_format == 'csv':
        return csv_response(to_csv(headers, rows), title.replace(' ', '_'))
    if export_format == 'pdf':
        return html_response(to_printable_document(title, headers, rows))
    raise UnsupportedExportFormatError(
        f"Unsupported export format '{export_format}'; use one of: {', '.join(EXPORT_FORMATS)}"
    )
