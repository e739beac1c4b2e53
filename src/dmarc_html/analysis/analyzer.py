"""
DMARC Record Analysis

This module classifies parsed DMARC records by their SPF and DKIM
authentication results and tallies the classes for a report.
"""

PASS = 'pass'

# Row classes
FULL_PASS = 'green'
PARTIAL_PASS = 'yellow'


def _dkim_results(record):
    return [dkim['result'] for dkim in record.get('dkim', [])]


def classify_record(record):
    """
    Classify a record by its authentication results.

    Returns 'green' when SPF passed and every DKIM signature passed (a record
    without DKIM signatures counts as every signature passing), 'yellow' when
    SPF or at least one DKIM signature passed, and None otherwise.
    """
    spf_pass = record.get('spf_result') == PASS
    dkim_results = _dkim_results(record)

    if spf_pass and all(result == PASS for result in dkim_results):
        return FULL_PASS
    if spf_pass or any(result == PASS for result in dkim_results):
        return PARTIAL_PASS
    return None


def _message_count(record):
    try:
        return int(record.get('count', ''))
    except ValueError:
        return 0


def summarize_records(records):
    """
    Tally the records of a report.

    Args:
        records: List of parsed records

    Returns:
        dict: record and message totals plus the number of records per class
    """
    summary = {
        'records': len(records),
        'messages': 0,
        FULL_PASS: 0,
        PARTIAL_PASS: 0,
        'none': 0,
    }

    for record in records:
        summary['messages'] += _message_count(record)
        summary[classify_record(record) or 'none'] += 1

    return summary
