"""
DMARC Report Parser

This module handles reading a DMARC aggregate report from disk (XML, gzip
or zip) and extracting the metadata, published policy and per-record
authentication results from the parsed XML tree.
"""

import gzip
import zipfile
from datetime import datetime, timezone

import xml.etree.ElementTree as ET_stdlib  # Keep for ParseError
from defusedxml import ElementTree as ET
from defusedxml.common import DefusedXmlException


class DmarcParseError(ValueError):
    """Raised when a document cannot be read as a DMARC aggregate report."""


def local_name(tag):
    """Return an element tag without its '{namespace}' prefix."""
    if isinstance(tag, str) and tag.startswith('{'):
        return tag.split('}', 1)[1]
    return tag


def find_child(node, name):
    """Return the first direct child of node called name, or None."""
    if node is None:
        return None
    for child in node:
        if local_name(child.tag) == name:
            return child
    return None


def find_children(node, name):
    """Return all direct children of node called name."""
    if node is None:
        return []
    return [child for child in node if local_name(child.tag) == name]


def get_text(node, name=None):
    """
    Get the stripped text content of a node, or of its child called name.

    Missing nodes and empty elements both give an empty string.
    """
    if name is not None:
        node = find_child(node, name)
    if node is None or node.text is None:
        return ''
    return node.text.strip()


def extract_xml_from_file(filepath):
    """
    Extract XML content from a file, handling different compression formats.

    Args:
        filepath: Path to the DMARC report file (.xml, .gz or .zip)

    Returns:
        bytes: The raw XML document, or None if a zip holds no XML file.
        The bytes are left undecoded so the parser honours the XML
        encoding declaration.
    """
    if filepath.endswith('.gz'):
        with gzip.open(filepath, 'rb') as f:
            return f.read()
    elif filepath.endswith('.zip'):
        with zipfile.ZipFile(filepath, 'r') as zip_ref:
            # A report archive carries a single XML document
            xml_files = [f for f in zip_ref.namelist() if f.endswith('.xml')]
            if not xml_files:
                return None
            with zip_ref.open(xml_files[0]) as f:
                return f.read()
    with open(filepath, 'rb') as f:
        return f.read()


def _format_timestamp(value):
    if not value:
        return ''
    try:
        moment = datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return value
    return moment.strftime('%Y-%m-%d %H:%M:%S UTC')


def _parse_metadata(metadata_elem):
    date_range_elem = find_child(metadata_elem, 'date_range')
    return {
        'org_name': get_text(metadata_elem, 'org_name'),
        'email': get_text(metadata_elem, 'email'),
        'extra_contact_info': get_text(metadata_elem, 'extra_contact_info'),
        'report_id': get_text(metadata_elem, 'report_id'),
        'begin_date': _format_timestamp(get_text(date_range_elem, 'begin')),
        'end_date': _format_timestamp(get_text(date_range_elem, 'end')),
    }


def _parse_policy(policy_elem):
    return {
        field: get_text(policy_elem, field)
        for field in ('domain', 'adkim', 'aspf', 'p', 'sp', 'pct')
    }


def _parse_record(record_elem):
    row_elem = find_child(record_elem, 'row')
    auth_results_elem = find_child(record_elem, 'auth_results')
    spf_elem = find_child(auth_results_elem, 'spf')

    dkim_auth = []
    for dkim_elem in find_children(auth_results_elem, 'dkim'):
        dkim_auth.append({
            'domain': get_text(dkim_elem, 'domain'),
            'result': get_text(dkim_elem, 'result'),
            'selector': get_text(dkim_elem, 'selector'),
        })

    return {
        'source_ip': get_text(row_elem, 'source_ip'),
        'count': get_text(row_elem, 'count'),
        'spf_domain': get_text(spf_elem, 'domain'),
        'spf_result': get_text(spf_elem, 'result'),
        'dkim': dkim_auth,
    }


def parse_dmarc_report(xml_content):
    """
    Parse DMARC report XML content and extract the fields shown in a report.

    Args:
        xml_content: XML document as bytes or string

    Returns:
        dict: 'metadata', 'policy_published' and 'records' of the report

    Raises:
        DmarcParseError: if the XML is malformed, unsafe, or lacks the
            report_metadata / policy_published sections
    """
    if not xml_content or not xml_content.strip():
        raise DmarcParseError("Empty document")

    try:
        root = ET.fromstring(xml_content)
    except (ET_stdlib.ParseError, DefusedXmlException) as e:
        raise DmarcParseError(f"Invalid XML: {e}") from e

    metadata_elem = find_child(root, 'report_metadata')
    if metadata_elem is None:
        raise DmarcParseError("Missing report_metadata section")

    policy_elem = find_child(root, 'policy_published')
    if policy_elem is None:
        raise DmarcParseError("Missing policy_published section")

    return {
        'metadata': _parse_metadata(metadata_elem),
        'policy_published': _parse_policy(policy_elem),
        'records': [_parse_record(elem) for elem in find_children(root, 'record')],
    }
