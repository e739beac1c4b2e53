"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))


SAMPLE_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<feedback>
  <report_metadata>
    <org_name>google.com</org_name>
    <email>noreply-dmarc-support@google.com</email>
    <extra_contact_info>https://support.google.com/a/answer/2466580</extra_contact_info>
    <report_id>1234567890123456789</report_id>
    <date_range>
      <begin>1700006400</begin>
      <end>1700092799</end>
    </date_range>
  </report_metadata>
  <policy_published>
    <domain>example.com</domain>
    <adkim>r</adkim>
    <aspf>r</aspf>
    <p>none</p>
    <sp>none</sp>
    <pct>100</pct>
  </policy_published>
  <record>
    <row>
      <source_ip>192.0.2.10</source_ip>
      <count>12</count>
      <policy_evaluated>
        <disposition>none</disposition>
        <dkim>pass</dkim>
        <spf>pass</spf>
      </policy_evaluated>
    </row>
    <identifiers>
      <header_from>example.com</header_from>
    </identifiers>
    <auth_results>
      <dkim>
        <domain>example.com</domain>
        <result>pass</result>
        <selector>google</selector>
      </dkim>
      <spf>
        <domain>example.com</domain>
        <result>pass</result>
      </spf>
    </auth_results>
  </record>
  <record>
    <row>
      <source_ip>198.51.100.7</source_ip>
      <count>3</count>
    </row>
    <auth_results>
      <dkim>
        <domain>example.com</domain>
        <result>pass</result>
        <selector>s1</selector>
      </dkim>
      <dkim>
        <domain>mailer.example.net</domain>
        <result>fail</result>
        <selector>s2</selector>
      </dkim>
      <spf>
        <domain>bounce.example.net</domain>
        <result>softfail</result>
      </spf>
    </auth_results>
  </record>
  <record>
    <row>
      <source_ip>203.0.113.99</source_ip>
      <count>1</count>
    </row>
    <auth_results>
      <spf>
        <domain>spoof.example.org</domain>
        <result>fail</result>
      </spf>
    </auth_results>
  </record>
</feedback>
"""


@pytest.fixture
def sample_xml():
    """A plain DMARC aggregate report with three records."""
    return SAMPLE_REPORT


@pytest.fixture
def namespaced_xml():
    """The sample report in the DMARC 2.0 XML namespace."""
    return SAMPLE_REPORT.replace(
        '<feedback>',
        '<feedback xmlns="urn:ietf:params:xml:ns:dmarc-2.0">',
    )


def make_record(spf_result, dkim_results, source_ip='192.0.2.1', count='1'):
    """Build a parsed record with the given SPF and DKIM results."""
    return {
        'source_ip': source_ip,
        'count': count,
        'spf_domain': 'example.com',
        'spf_result': spf_result,
        'dkim': [
            {'domain': 'example.com', 'result': result, 'selector': f's{index}'}
            for index, result in enumerate(dkim_results, start=1)
        ],
    }


@pytest.fixture
def record_factory():
    """Factory building parsed records."""
    return make_record
