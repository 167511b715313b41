"""Client certificate chain extraction."""

import re
from typing import Iterable, List
from urllib.parse import unquote

from cryptography import x509

from request_inspector.config.log import get_logger
from request_inspector.report.view import Certificate

logger = get_logger(__name__)

_PEM_BLOCK = re.compile(r'-----BEGIN CERTIFICATE-----.+?-----END CERTIFICATE-----', re.DOTALL)


def split_pem_bundle(text: str) -> List[str]:
    """Split concatenated PEM certificates into individual blocks.

    Proxies commonly URL-encode the bundle when forwarding it in a header
    (nginx ``$ssl_client_escaped_cert``), so percent escapes are decoded first.
    """
    if '%' in text:
        text = unquote(text)
    return _PEM_BLOCK.findall(text)


def parse_pem_certificate(pem: str | bytes) -> Certificate:
    if isinstance(pem, str):
        pem = pem.encode('ascii')
    cert = x509.load_pem_x509_certificate(pem)
    return Certificate(subject=cert.subject.rfc4514_string(), issuer=cert.issuer.rfc4514_string())


def parse_pem_chain(pems: Iterable[str | bytes]) -> List[Certificate]:
    """Parse a chain, keeping positions of certificates that fail to load."""
    chain = []
    for index, pem in enumerate(pems):
        try:
            chain.append(parse_pem_certificate(pem))
        except ValueError as e:
            logger.warning('unreadable client certificate', position=index, error=str(e))
            chain.append(Certificate())
    return chain
