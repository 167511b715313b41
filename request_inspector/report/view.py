"""Read-only request contract consumed by the report renderer."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Union

# Attribute name under which a client certificate chain is listed
CERTIFICATE_CHAIN_ATTRIBUTE = 'tls.client_cert_chain'

Number = Optional[int]


@dataclass(frozen=True)
class Certificate:
    """The parts of a client certificate that end up in a report."""

    subject: Optional[str] = None
    issuer: Optional[str] = None


@dataclass(frozen=True)
class Principal:
    """Authenticated identity: display name plus a type tag."""

    name: Optional[str] = None
    type_name: Optional[str] = None


class RequestView(Protocol):
    """Everything a report reads from a request.

    Text accessors return ``None`` when a value is absent. Numeric accessors
    return ``-1`` for unknown, or ``None``. Name enumerations are reported in
    the order they are yielded.
    """

    def server_name(self) -> Optional[str]: ...

    def server_port(self) -> Number: ...

    def scheme(self) -> Optional[str]: ...

    def protocol(self) -> Optional[str]: ...

    def path_info(self) -> Optional[str]: ...

    def path_translated(self) -> Optional[str]: ...

    def servlet_path(self) -> Optional[str]: ...

    def context_path(self) -> Optional[str]: ...

    def request_uri(self) -> Optional[str]: ...

    def auth_type(self) -> Optional[str]: ...

    def content_type(self) -> Optional[str]: ...

    def content_length(self) -> Number: ...

    def query_string(self) -> Optional[str]: ...

    def remote_user(self) -> Optional[str]: ...

    def requested_session_id(self) -> Optional[str]: ...

    def method(self) -> Optional[str]: ...

    def local_addr(self) -> Optional[str]: ...

    def local_name(self) -> Optional[str]: ...

    def local_port(self) -> Number: ...

    def remote_addr(self) -> Optional[str]: ...

    def remote_host(self) -> Optional[str]: ...

    def remote_port(self) -> Number: ...

    def attribute_names(self) -> Iterable[str]: ...

    def attribute(self, name: str) -> Any: ...

    def header_names(self) -> Iterable[str]: ...

    def header_values(self, name: str) -> Iterable[str]: ...

    def parameter_names(self) -> Iterable[str]: ...

    def parameter_values(self, name: str) -> Optional[Sequence[str]]: ...

    def certificate_chain(self) -> Optional[Sequence[Certificate]]: ...

    def principal(self) -> Optional[Principal]: ...


@dataclass
class StaticRequestView:
    """A ``RequestView`` over plain values.

    Useful for callers that already hold request metadata and for tests that
    need a fixed enumeration order. ``headers`` and ``parameters`` map a name to
    its values; their iteration order is the reported order.
    """

    server_name_: Optional[str] = None
    server_port_: Number = None
    scheme_: Optional[str] = None
    protocol_: Optional[str] = None
    path_info_: Optional[str] = None
    path_translated_: Optional[str] = None
    servlet_path_: Optional[str] = None
    context_path_: Optional[str] = None
    request_uri_: Optional[str] = None
    auth_type_: Optional[str] = None
    content_type_: Optional[str] = None
    content_length_: Number = None
    query_string_: Optional[str] = None
    remote_user_: Optional[str] = None
    requested_session_id_: Optional[str] = None
    method_: Optional[str] = None
    local_addr_: Optional[str] = None
    local_name_: Optional[str] = None
    local_port_: Number = None
    remote_addr_: Optional[str] = None
    remote_host_: Optional[str] = None
    remote_port_: Number = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, List[str]] = field(default_factory=dict)
    parameters: Dict[str, Union[List[str], None]] = field(default_factory=dict)
    certificates: Optional[List[Certificate]] = None
    principal_: Optional[Principal] = None

    def server_name(self):
        return self.server_name_

    def server_port(self):
        return self.server_port_

    def scheme(self):
        return self.scheme_

    def protocol(self):
        return self.protocol_

    def path_info(self):
        return self.path_info_

    def path_translated(self):
        return self.path_translated_

    def servlet_path(self):
        return self.servlet_path_

    def context_path(self):
        return self.context_path_

    def request_uri(self):
        return self.request_uri_

    def auth_type(self):
        return self.auth_type_

    def content_type(self):
        return self.content_type_

    def content_length(self):
        return self.content_length_

    def query_string(self):
        return self.query_string_

    def remote_user(self):
        return self.remote_user_

    def requested_session_id(self):
        return self.requested_session_id_

    def method(self):
        return self.method_

    def local_addr(self):
        return self.local_addr_

    def local_name(self):
        return self.local_name_

    def local_port(self):
        return self.local_port_

    def remote_addr(self):
        return self.remote_addr_

    def remote_host(self):
        return self.remote_host_

    def remote_port(self):
        return self.remote_port_

    def attribute_names(self):
        return list(self.attributes)

    def attribute(self, name):
        return self.attributes.get(name)

    def header_names(self):
        return list(self.headers)

    def header_values(self, name):
        return list(self.headers.get(name) or [])

    def parameter_names(self):
        return list(self.parameters)

    def parameter_values(self, name):
        return self.parameters.get(name)

    def certificate_chain(self):
        return self.certificates

    def principal(self):
        return self.principal_
