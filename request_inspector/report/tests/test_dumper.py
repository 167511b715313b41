"""Tests for the request report renderer."""

import pytest

from request_inspector.report import (
    CERTIFICATE_CHAIN_ATTRIBUTE,
    Certificate,
    LayoutConfig,
    Principal,
    RequestDumper,
    StaticRequestView,
)

SECTIONS = ['GENERAL', 'LOCAL', 'REMOTE', 'ATTRIBUTES', 'HEADERS', 'PARAMETERS', 'PRINCIPAL']


@pytest.fixture
def layout():
    return LayoutConfig(line_end='\n', indent='  ', section_break='\n== ', name_value_separator='=', value_separator=';')


@pytest.fixture
def dumper(layout):
    return RequestDumper(layout)


@pytest.fixture
def populated_view():
    return StaticRequestView(
        server_name_='api.local',
        server_port_=443,
        scheme_='https',
        protocol_='HTTP/1.1',
        servlet_path_='/orders',
        context_path_='/shop',
        request_uri_='/shop/orders',
        auth_type_='Bearer',
        content_length_=-1,
        query_string_='id=7',
        remote_user_='alice',
        requested_session_id_='abc',
        method_='GET',
        local_addr_='10.0.0.1',
        local_name_='web-1',
        local_port_=8443,
        remote_addr_='192.0.2.5',
        remote_host_='192.0.2.5',
        remote_port_=51234,
        attributes={'trace': 'on'},
        headers={'accept': ['*/*'], 'x-multi': ['a', 'b']},
        parameters={'id': ['7']},
        principal_=Principal(name='alice', type_name='myapp.auth.User'),
    )


def _section(report: str, label: str, layout: LayoutConfig) -> str:
    """Text between a section header and the next section header."""
    start = report.index(layout.section_break + label + layout.line_end) + len(layout.section_break + label + layout.line_end)
    end = report.find(layout.section_break, start)
    return report[start:] if end == -1 else report[start:end]


def test_format_pair(dumper):
    assert dumper.format_pair('ServerName', 'api.local') == '  ServerName=api.local\n'


def test_format_pair_does_not_escape_separators(dumper):
    assert dumper.format_pair('a=b', 'c\nd;') == '  a=b=c\nd;\n'


def test_format_pair_compact_layout():
    dumper = RequestDumper(LayoutConfig.compact())
    assert dumper.format_pair('name', 'value') == 'namevalue'
    assert dumper.format_pair('', '') == ''


def test_full_report(dumper, populated_view):
    expected = (
        '\n== GENERAL\n'
        '  ServerName=api.local\n'
        '  ServerPort=443\n'
        '  Scheme=https\n'
        '  Protocol=HTTP/1.1\n'
        '  PathInfo=null\n'
        '  PathTranslated=null\n'
        '  ServletPath=/orders\n'
        '  ContextPath=/shop\n'
        '  RequestURI=/shop/orders\n'
        '  AuthType=Bearer\n'
        '  ContentType=null\n'
        '  ContentLength=-1\n'
        '  QueryString=id=7\n'
        '  RemoteUser=alice\n'
        '  RequestedSessionId=abc\n'
        '  Method=GET\n'
        '\n== LOCAL\n'
        '  LocalAddr=10.0.0.1\n'
        '  LocalName=web-1\n'
        '  LocalPort=8443\n'
        '\n== REMOTE\n'
        '  RemoteUser=alice\n'
        '  RemoteAddr=192.0.2.5\n'
        '  RemoteHost=192.0.2.5\n'
        '  RemotePort=51234\n'
        '\n== ATTRIBUTES\n'
        '  trace=on\n'
        '\n== HEADERS\n'
        '  accept=*/*;\n'
        '  x-multi=a;b;\n'
        '\n== PARAMETERS\n'
        '  id=7;\n'
        '\n== PRINCIPAL\n'
        '  Principal=alice\n'
        '  Principal Class=myapp.auth.User\n'
    )
    assert dumper.dump(populated_view) == expected


def test_sections_in_order(layout, dumper, populated_view):
    report = dumper.dump(populated_view)
    positions = [report.index(layout.section_break + label + layout.line_end) for label in SECTIONS]
    assert positions == sorted(positions)
    for label in SECTIONS:
        assert report.count(layout.section_break + label + layout.line_end) == 1


def test_documented_scenario(dumper):
    report = dumper.dump(StaticRequestView(server_name_='api.local', server_port_=443))
    assert report.startswith('\n== GENERAL\n  ServerName=api.local\n  ServerPort=443\n')
    assert report.endswith('  Principal=null\n  Principal Class=null\n')


def test_absent_fields_render_null(dumper):
    report = dumper.dump(StaticRequestView())
    pairs = [line for line in report.split('\n') if line.startswith('  ')]
    assert len(pairs) == 25
    assert all(line.split('=', 1)[1] == 'null' for line in pairs)


def test_numeric_sentinel_is_not_null(dumper):
    report = dumper.dump(StaticRequestView(server_port_=-1, content_length_=-1, local_port_=-1, remote_port_=-1))
    for name in ('ServerPort', 'ContentLength', 'LocalPort', 'RemotePort'):
        assert f'  {name}=-1\n' in report


def test_remote_user_listed_twice(dumper):
    report = dumper.dump(StaticRequestView(remote_user_='bob'))
    assert report.count('  RemoteUser=bob\n') == 2


@pytest.mark.parametrize('value_separator', [';', ','])
def test_header_values_joined_with_trailing_separator(value_separator):
    layout = LayoutConfig(value_separator=value_separator)
    report = RequestDumper(layout).dump(StaticRequestView(headers={'x-list': ['a', 'b']}))
    assert f'  x-list=a{value_separator}b{value_separator}\n' in _section(report, 'HEADERS', layout)


def test_header_without_values(layout, dumper):
    report = dumper.dump(StaticRequestView(headers={'x-empty': []}))
    assert _section(report, 'HEADERS', layout) == '  x-empty=\n'


def test_names_keep_view_order(layout, dumper):
    view = StaticRequestView(
        attributes={'zeta': 1, 'alpha': 2},
        headers={'x-b': ['1'], 'x-a': ['2']},
        parameters={'p2': ['x'], 'p1': ['y']},
    )
    report = dumper.dump(view)
    assert _section(report, 'ATTRIBUTES', layout) == '  zeta=1\n  alpha=2\n'
    assert _section(report, 'HEADERS', layout) == '  x-b=1;\n  x-a=2;\n'
    assert _section(report, 'PARAMETERS', layout) == '  p2=x;\n  p1=y;\n'


def test_parameters_mirror_header_format(layout, dumper):
    report = dumper.dump(StaticRequestView(parameters={'tag': ['red', 'blue'], 'missing': None}))
    assert _section(report, 'PARAMETERS', layout) == '  tag=red;blue;\n  missing=\n'


def test_attribute_values_use_text_form(layout, dumper):
    report = dumper.dump(StaticRequestView(attributes={'count': 3, 'flag': True, 'nothing': None}))
    assert _section(report, 'ATTRIBUTES', layout) == '  count=3\n  flag=True\n  nothing=null\n'


def test_empty_certificate_chain(layout, dumper):
    view = StaticRequestView(attributes={CERTIFICATE_CHAIN_ATTRIBUTE: 'chain'}, certificates=[])
    attributes = _section(dumper.dump(view), 'ATTRIBUTES', layout)
    assert attributes == f'  {CERTIFICATE_CHAIN_ATTRIBUTE}=chain\n'
    assert 'CERT-' not in attributes


def test_certificate_chain_blocks(layout, dumper):
    view = StaticRequestView(
        attributes={'before': 'x', CERTIFICATE_CHAIN_ATTRIBUTE: 'chain', 'after': 'y'},
        certificates=[Certificate(subject='CN=leaf', issuer='CN=ca'), Certificate()],
    )
    assert _section(dumper.dump(view), 'ATTRIBUTES', layout) == (
        '  before=x\n'
        f'  {CERTIFICATE_CHAIN_ATTRIBUTE}=chain\n'
        '    CERT-0\n'
        '    SubjectDN=CN=leaf\n'
        '    IssuerDN=CN=ca\n'
        '    CERT-1\n'
        '    SubjectDN=null\n'
        '    IssuerDN=null\n'
        '  after=y\n'
    )


def test_chain_only_rendered_under_its_attribute(dumper):
    view = StaticRequestView(certificates=[Certificate(subject='CN=leaf', issuer='CN=ca')])
    assert 'CERT-' not in dumper.dump(view)


def test_principal_without_name(layout, dumper):
    report = dumper.dump(StaticRequestView(principal_=Principal(type_name='myapp.auth.Anonymous')))
    assert _section(report, 'PRINCIPAL', layout) == '  Principal=null\n  Principal Class=myapp.auth.Anonymous\n'


def test_accessor_errors_propagate(dumper):
    class BrokenView(StaticRequestView):
        def header_names(self):
            raise RuntimeError('adapter failure')

    with pytest.raises(RuntimeError, match='adapter failure'):
        dumper.dump(BrokenView())


def test_dumper_is_reusable(dumper, populated_view):
    assert dumper.dump(populated_view) == dumper.dump(populated_view)
