from urllib.parse import quote

from request_inspector.report.certificates import parse_pem_certificate, parse_pem_chain, split_pem_bundle
from request_inspector.report.view import Certificate

LEAF_SUBJECT = 'CN=client.example,O=Example'
CA_SUBJECT = 'CN=Example CA,O=Example'


def test_parse_certificate_names(pem_chain):
    cert = parse_pem_certificate(pem_chain[0])
    assert cert == Certificate(subject=LEAF_SUBJECT, issuer=CA_SUBJECT)


def test_parse_chain_keeps_order(pem_chain):
    chain = parse_pem_chain(pem_chain)
    assert [c.subject for c in chain] == [LEAF_SUBJECT, CA_SUBJECT]
    assert all(c.issuer == CA_SUBJECT for c in chain)


def test_unreadable_certificate_keeps_position(pem_chain):
    chain = parse_pem_chain([pem_chain[0], 'not a certificate', pem_chain[1]])
    assert len(chain) == 3
    assert chain[1] == Certificate(subject=None, issuer=None)
    assert chain[2].subject == CA_SUBJECT


def test_split_bundle(pem_chain):
    bundle = '\n'.join(pem_chain)
    assert split_pem_bundle(bundle) == [pem.strip() for pem in pem_chain]


def test_split_url_encoded_bundle(pem_chain):
    assert split_pem_bundle(quote(pem_chain[0])) == [pem_chain[0].strip()]


def test_split_bundle_without_certificates():
    assert split_pem_bundle('garbage') == []
