"""
HTML Report Generator for DMARC aggregate reports

This module renders a parsed DMARC report as a static HTML page with
metadata, published policy and per-record authentication tables.
"""

import sys

from dmarc_html.parsers.dmarc_parser import parse_dmarc_report
from dmarc_html.analysis.analyzer import classify_record
from dmarc_html.utils.helpers import resolve_ip, escape, cell, NOT_AVAILABLE

STYLE = """
  body { font-family: Arial, sans-serif; }
  table { border-collapse: collapse; width: 100%; }
  th, td { border: 1px solid #dddddd; text-align: left; padding: 8px; }
  th { background-color: #f2f2f2; }
"""

METADATA_FIELDS = [
    ('Organization', 'org_name'),
    ('Email', 'email'),
    ('Extra Contact Info', 'extra_contact_info'),
    ('Report ID', 'report_id'),
    ('Begin Date', 'begin_date'),
    ('End Date', 'end_date'),
]

POLICY_FIELDS = [
    ('Domain', 'domain'),
    ('ADKIM', 'adkim'),
    ('ASPF', 'aspf'),
    ('P', 'p'),
    ('SP', 'sp'),
    ('PCT', 'pct'),
]

RECORD_HEADERS = [
    'Record No', 'Source IP', 'Hostname', 'Count', 'SPF Domain',
    'SPF Result', 'DKIM Domain', 'DKIM Result', 'DKIM Selector',
]


def row_style(record):
    """Return the style attribute highlighting a record's rows, if any."""
    color = classify_record(record)
    if color is None:
        return ''
    return f' style="background-color: {color};"'


def generate_field_table(title, fields, values):
    """Generate a two-column table of header/value rows."""
    rows = ''.join(
        f"<tr><th>{label}</th><td>{escape(values.get(key, ''))}</td></tr>\n"
        for label, key in fields
    )
    return f"""<h2>{title}</h2>
<table>
{rows}</table>
"""


def generate_record_rows(record_no, record, hostname):
    """Generate the table rows of one record, one per DKIM signature."""
    style = row_style(record)
    leading_cells = (
        f"<td>{record_no}</td>"
        f"<td>{escape(record['source_ip'])}</td>"
        f"<td>{cell(hostname)}</td>"
        f"<td>{escape(record['count'])}</td>"
        f"<td>{escape(record['spf_domain'])}</td>"
        f"<td>{escape(record['spf_result'])}</td>"
    )

    dkim_entries = record['dkim'] or [
        {'domain': NOT_AVAILABLE, 'result': NOT_AVAILABLE, 'selector': NOT_AVAILABLE}
    ]

    html_content = ''
    for dkim in dkim_entries:
        html_content += (
            f"<tr{style}>{leading_cells}"
            f"<td>{escape(dkim['domain'])}</td>"
            f"<td>{escape(dkim['result'])}</td>"
            f"<td>{escape(dkim['selector'])}</td></tr>\n"
        )
    return html_content


def generate_html_report(report, resolve_ips=True, resolver=resolve_ip):
    """
    Generate an HTML page from a parsed DMARC report.

    Args:
        report: Parsed report from parse_dmarc_report
        resolve_ips: Whether to look up a hostname for each source IP
        resolver: Callable mapping an IP address to a hostname or None

    Returns:
        str: The HTML document
    """
    header_cells = ''.join(f"<th>{header}</th>" for header in RECORD_HEADERS)

    record_rows = ''
    for record_no, record in enumerate(report['records'], start=1):
        # Lookups run one record at a time
        hostname = resolver(record['source_ip']) if resolve_ips else None
        record_rows += generate_record_rows(record_no, record, hostname)

    return f"""<html>
<head>
<meta charset="utf-8">
<title>DMARC Report</title>
<style>{STYLE}</style>
</head>
<body>
<h1>DMARC Report Summary</h1>
{generate_field_table('Report Metadata', METADATA_FIELDS, report['metadata'])}
{generate_field_table('Policy Published', POLICY_FIELDS, report['policy_published'])}
<h2>Records</h2>
<table>
<tr>{header_cells}</tr>
{record_rows}</table>
</body>
</html>
"""


def format_dmarc_report_as_html(xml_content, resolve_ips=True, resolver=resolve_ip):
    """
    Parse DMARC report XML and render it as HTML.

    Errors are reported on stderr and give an empty string.
    """
    try:
        report = parse_dmarc_report(xml_content)
        return generate_html_report(report, resolve_ips=resolve_ips, resolver=resolver)
    except Exception as e:
        print(f"Failed to format XML as HTML: {e}", file=sys.stderr)
        return ''


def write_html_report(html_content, filepath):
    """Write an HTML report to filepath. Returns False if writing failed."""
    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(html_content)
    except OSError as e:
        print(f"Failed to save HTML report: {e}", file=sys.stderr)
        return False
    print(f"HTML report has been saved to {filepath}")
    return True
