"""
Utility functions for the DMARC report converter.

This module contains the reverse DNS lookup and small formatting helpers.
"""

import html
import ipaddress
import re
import subprocess

# Seconds to wait for a single reverse lookup
DNS_TIMEOUT = 10

NSLOOKUP_COMMAND = 'nslookup'

NAME_PATTERN = re.compile(r'name = (.+)')

# Shown in cells with no value to display
NOT_AVAILABLE = 'N/A'


def is_ip_address(value):
    """Check whether value is a valid IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def parse_nslookup_output(output):
    """Return the hostname from the first 'name = ' line of nslookup output."""
    match = NAME_PATTERN.search(output or '')
    if not match:
        return None
    hostname = match.group(1).strip()
    if hostname.endswith('.'):
        hostname = hostname[:-1]
    return hostname or None


def resolve_ip(ip, timeout=DNS_TIMEOUT):
    """
    Resolve an IP address to a hostname using the system nslookup command.

    The lookup is best effort: any failure gives None.
    """
    if not is_ip_address(ip):
        return None

    try:
        result = subprocess.run(
            [NSLOOKUP_COMMAND, ip],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, UnicodeDecodeError, subprocess.TimeoutExpired):
        return None

    return parse_nslookup_output(result.stdout)


def escape(value):
    """HTML-escape a value for a table cell."""
    return html.escape(str(value))


def cell(value):
    """HTML-escape a value, showing N/A for None."""
    return escape(NOT_AVAILABLE if value is None else value)
