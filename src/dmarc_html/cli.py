"""
DMARC Report to HTML Command-Line Interface

This module provides the command-line interface, handling argument parsing
and the main program flow: read one report, render it, write the HTML.
"""

import os
import sys
import gzip
import zlib
import zipfile
import argparse

from dmarc_html.parsers.dmarc_parser import extract_xml_from_file, parse_dmarc_report, DmarcParseError
from dmarc_html.reporting.html_report import format_dmarc_report_as_html, write_html_report
from dmarc_html.reporting.text_report import generate_summary
from dmarc_html.utils.helpers import resolve_ip, DNS_TIMEOUT


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description='Convert a DMARC aggregate report to an HTML summary')
    parser.add_argument('file', nargs='?', help='DMARC report file (.xml, .xml.gz or .zip); prompted for if omitted')
    parser.add_argument('--output', '-o', help='HTML output file (default: <file>.html)')
    parser.add_argument('--no-resolve', action='store_true', help='Do not resolve source IP addresses to hostnames')
    parser.add_argument('--dns-timeout', type=float, default=DNS_TIMEOUT,
                        help=f'Seconds to wait for each reverse DNS lookup (default: {DNS_TIMEOUT})')
    parser.add_argument('--verbose', '-v', action='store_true', help='Print a summary of the report')
    return parser.parse_args(argv)


def prompt_for_path():
    """Ask for the report path on the terminal."""
    print("Please input the DMARC XML report file path:")
    try:
        return input("File path: ").strip()
    except EOFError:
        return ''


def main(argv=None):
    """Main function converting one DMARC report."""
    args = parse_args(argv)

    filepath = args.file or prompt_for_path()
    if not filepath:
        return 0

    if not os.path.isfile(filepath):
        print(f"Error: {filepath} is not a valid file", file=sys.stderr)
        return 1

    print(f"Processing {os.path.basename(filepath)}...")
    try:
        xml_content = extract_xml_from_file(filepath)
    except (OSError, EOFError, zlib.error, zipfile.BadZipFile, gzip.BadGzipFile) as e:
        print(f"Error: failed to read {filepath}: {e}", file=sys.stderr)
        return 1
    if xml_content is None:
        print(f"Error: no XML report found in {filepath}", file=sys.stderr)
        return 1

    hostnames = {}

    def resolver(ip):
        hostnames[ip] = resolve_ip(ip, timeout=args.dns_timeout)
        return hostnames[ip]

    html_content = format_dmarc_report_as_html(xml_content, resolve_ips=not args.no_resolve, resolver=resolver)

    output_path = args.output or f"{filepath}.html"
    if not write_html_report(html_content, output_path):
        return 1
    if not html_content:
        return 1

    if args.verbose:
        try:
            report = parse_dmarc_report(xml_content)
        except DmarcParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print("\n" + generate_summary(report, hostnames))

    return 0


if __name__ == "__main__":
    sys.exit(main())
