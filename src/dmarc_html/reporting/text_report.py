"""
Console Summary for DMARC aggregate reports

This module generates a short human-readable text summary of a parsed
report, printed by the command line tool in verbose mode.
"""

from tabulate import tabulate

from dmarc_html.analysis.analyzer import classify_record, summarize_records, FULL_PASS, PARTIAL_PASS
from dmarc_html.utils.helpers import NOT_AVAILABLE

STATUS_LABELS = {
    FULL_PASS: 'PASS',
    PARTIAL_PASS: 'PARTIAL',
    None: 'FAIL',
}


def generate_summary(report, hostnames=None):
    """
    Generate a text summary of a parsed report.

    Args:
        report: Parsed report from parse_dmarc_report
        hostnames: Optional mapping of source IP to resolved hostname

    Returns:
        str: Formatted text summary
    """
    hostnames = hostnames or {}
    metadata = report['metadata']
    records = report['records']
    summary = summarize_records(records)

    lines = []
    lines.append("= DMARC Report Summary =")
    lines.append(f"Organization: {metadata['org_name']}")
    lines.append(f"Report ID: {metadata['report_id']}")
    lines.append(f"Policy Domain: {report['policy_published']['domain']}")
    lines.append(f"Records: {summary['records']} ({summary['messages']} messages)")
    lines.append(
        f"Fully passed: {summary[FULL_PASS]}, "
        f"partially passed: {summary[PARTIAL_PASS]}, "
        f"failed: {summary['none']}"
    )
    lines.append("")

    if not records:
        lines.append("No records in this report.")
        return "\n".join(lines)

    table = []
    for record_no, record in enumerate(records, start=1):
        dkim_results = ','.join(dkim['result'] for dkim in record['dkim']) or NOT_AVAILABLE
        table.append([
            record_no,
            record['source_ip'],
            hostnames.get(record['source_ip']) or NOT_AVAILABLE,
            record['count'],
            record['spf_result'],
            dkim_results,
            STATUS_LABELS[classify_record(record)],
        ])
    lines.append(tabulate(
        table,
        headers=["No", "Source IP", "Hostname", "Count", "SPF", "DKIM", "Status"],
        tablefmt="simple",
    ))
    return "\n".join(lines)
