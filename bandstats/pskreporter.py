"""PSKReporter client for retrieving reception reports."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

import requests

from .errors import FetchError, OutputError, SpotFormatError

logger = logging.getLogger(__name__)

USER_AGENT = 'bandstats/1.0'

REPORT_FIELDS = ('senderLocator', 'receiverLocator', 'frequency', 'sNR', 'flowStartSeconds')


def fetch_report_xml(url: str, timeout: float = 60, save_to: Path | None = None) -> str:
    """Fetch the reception report XML document.

    Args:
        url: PSKReporter query URL
        timeout: Seconds before the request is abandoned
        save_to: Optional path the raw document is written to

    Returns:
        The XML document as text

    Raises:
        FetchError: on connection failure, timeout or non-success status
    """
    logger.info("Getting PSKReporter spots from URL: %s", url)
    try:
        r = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=timeout)
        r.raise_for_status()
    except requests.exceptions.Timeout:
        raise FetchError(f"Timed out after {timeout}s fetching {url}")
    except requests.RequestException as e:
        raise FetchError(f"Error getting PSKReporter spots: {e}")

    xml_data = r.text
    if save_to is not None:
        try:
            save_to.write_text(xml_data, encoding='utf-8')
        except OSError as e:
            raise OutputError(f"Could not save spots to {save_to}: {e}")
        logger.debug("Saved %d bytes to %s", len(xml_data), save_to)
    return xml_data


def _field(report: ET.Element, name: str) -> str | None:
    # PSKReporter sends fields as attributes; accept child elements too
    value = report.get(name)
    if value is None:
        value = report.findtext(name)
    return value


def parse_reception_reports(xml_data: str) -> list[dict]:
    """Parse a PSKReporter document into a list of report dicts.

    Each dict carries the keys in REPORT_FIELDS; absent fields are None.

    Raises:
        SpotFormatError: if the XML is malformed, the root is not
            receptionReports, or it holds no receptionReport elements
    """
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as e:
        raise SpotFormatError(f"Could not parse PSKReporter XML: {e}")

    if root.tag != 'receptionReports':
        raise SpotFormatError(f"Expected receptionReports root element, got {root.tag!r}")

    elements = root.findall('./receptionReport')
    if not elements:
        raise SpotFormatError("No receptionReport elements in PSKReporter response")

    return [{name: _field(report, name) for name in REPORT_FIELDS} for report in elements]
