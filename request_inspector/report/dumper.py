"""Plain-text rendering of request metadata for debugging."""

from typing import Any, Iterable, List, Optional, Sequence

from request_inspector.report.layout import LayoutConfig
from request_inspector.report.view import CERTIFICATE_CHAIN_ATTRIBUTE, Certificate, RequestView

NULL_TEXT = 'null'


def as_text(value: Any) -> str:
    """Render a possibly absent value; ``None`` becomes ``null``."""
    return NULL_TEXT if value is None else str(value)


class RequestDumper:
    """Formats a request view into a sectioned text report.

    Output is not escaped: names and values containing the separators are
    written as they are. An instance holds no mutable state and can be shared
    between concurrent requests.
    """

    def __init__(self, layout: LayoutConfig):
        self.layout = layout

    def format_pair(self, name: str, value: str) -> str:
        layout = self.layout
        return layout.indent + name + layout.name_value_separator + value + layout.line_end

    def dump(self, request: RequestView) -> str:
        """Render every section of the report for ``request``.

        Accessor errors raised by the view propagate to the caller.
        """
        parts: List[str] = []

        self._section(parts, 'GENERAL')
        self._pairs(
            parts,
            ('ServerName', request.server_name()),
            ('ServerPort', request.server_port()),
            ('Scheme', request.scheme()),
            ('Protocol', request.protocol()),
            ('PathInfo', request.path_info()),
            ('PathTranslated', request.path_translated()),
            ('ServletPath', request.servlet_path()),
            ('ContextPath', request.context_path()),
            ('RequestURI', request.request_uri()),
            ('AuthType', request.auth_type()),
            ('ContentType', request.content_type()),
            ('ContentLength', request.content_length()),
            ('QueryString', request.query_string()),
            ('RemoteUser', request.remote_user()),
            ('RequestedSessionId', request.requested_session_id()),
            ('Method', request.method()),
        )

        self._section(parts, 'LOCAL')
        self._pairs(
            parts,
            ('LocalAddr', request.local_addr()),
            ('LocalName', request.local_name()),
            ('LocalPort', request.local_port()),
        )

        # RemoteUser repeats the GENERAL entry; log parsers rely on both
        self._section(parts, 'REMOTE')
        self._pairs(
            parts,
            ('RemoteUser', request.remote_user()),
            ('RemoteAddr', request.remote_addr()),
            ('RemoteHost', request.remote_host()),
            ('RemotePort', request.remote_port()),
        )

        self._section(parts, 'ATTRIBUTES')
        for name in request.attribute_names():
            parts.append(self.format_pair(name, as_text(request.attribute(name))))
            if name == CERTIFICATE_CHAIN_ATTRIBUTE:
                self._certificates(parts, request.certificate_chain())

        self._section(parts, 'HEADERS')
        for name in request.header_names():
            self._multi_value(parts, name, request.header_values(name))

        self._section(parts, 'PARAMETERS')
        for name in request.parameter_names():
            self._multi_value(parts, name, request.parameter_values(name))

        principal = request.principal()
        self._section(parts, 'PRINCIPAL')
        self._pairs(
            parts,
            ('Principal', principal.name if principal else None),
            ('Principal Class', principal.type_name if principal else None),
        )

        return ''.join(parts)

    def _section(self, parts: List[str], label: str) -> None:
        parts.append(self.layout.section_break + label + self.layout.line_end)

    def _pairs(self, parts: List[str], *pairs) -> None:
        parts.extend(self.format_pair(name, as_text(value)) for name, value in pairs)

    def _multi_value(self, parts: List[str], name: str, values: Optional[Iterable[Any]]) -> None:
        layout = self.layout
        parts.append(layout.indent + name + layout.name_value_separator)
        for value in values or ():
            parts.append(as_text(value) + layout.value_separator)
        parts.append(layout.line_end)

    def _certificates(self, parts: List[str], chain: Optional[Sequence[Certificate]]) -> None:
        indent = self.layout.indent
        for index, cert in enumerate(chain or ()):
            parts.append(indent + indent + f'CERT-{index}' + self.layout.line_end)
            parts.append(indent + self.format_pair('SubjectDN', as_text(cert.subject)))
            parts.append(indent + self.format_pair('IssuerDN', as_text(cert.issuer)))
