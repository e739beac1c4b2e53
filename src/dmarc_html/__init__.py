"""
DMARC Report to HTML

A tool for converting a DMARC aggregate XML report into a static HTML
summary with per-record SPF/DKIM results.
"""

__version__ = '1.0.0'
