"""Adapter exposing a live Starlette request as a ``RequestView``."""

from typing import Any, Dict, Iterable, List, Optional

from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request

from request_inspector.report.certificates import parse_pem_chain, split_pem_bundle
from request_inspector.report.view import CERTIFICATE_CHAIN_ATTRIBUTE, Certificate, Principal

REDACTED = '***REDACTED***'
DEFAULT_PORTS = {'http': 80, 'ws': 80, 'https': 443, 'wss': 443}


class HeaderSanitizer:
    def __init__(self, redact_headers: Optional[Iterable[str]] = None):
        base_sensitive = {'authorization', 'cookie', 'set-cookie'}
        additional = set(x.lower() for x in (redact_headers or []))
        self.sensitive_headers = base_sensitive | additional

    def is_sensitive(self, name: str) -> bool:
        return name.lower() in self.sensitive_headers

    def sanitize(self, name: str, values: List[str]) -> List[str]:
        if self.is_sensitive(name):
            return [REDACTED for _ in values]
        return values


class StarletteRequestView:
    """Snapshot view of a Starlette request.

    Request bodies are never read here. Callers that already awaited
    ``request.form()`` pass the result as ``form`` so form fields are reported
    as parameters after the query string ones.
    """

    def __init__(
        self,
        request: Request,
        form: Optional[FormData] = None,
        sanitizer: Optional[HeaderSanitizer] = None,
        session_cookie: str = 'session',
        client_cert_header: Optional[str] = None,
    ):
        self.request = request
        self.scope = request.scope
        self.sanitizer = sanitizer or HeaderSanitizer()
        self.session_cookie = session_cookie
        self.client_cert_header = client_cert_header
        self._parameters = self._collect_parameters(form)
        self._chain: Optional[List[Certificate]] = None

    # GENERAL

    def server_name(self) -> Optional[str]:
        return self.request.url.hostname

    def server_port(self) -> int:
        url = self.request.url
        if url.port is not None:
            return url.port
        return DEFAULT_PORTS.get(url.scheme, -1)

    def scheme(self) -> Optional[str]:
        return self.request.url.scheme or None

    def protocol(self) -> Optional[str]:
        version = self.scope.get('http_version')
        return f'HTTP/{version}' if version else None

    def path_info(self) -> Optional[str]:
        return None

    def path_translated(self) -> Optional[str]:
        return None

    def servlet_path(self) -> str:
        root_path = self.context_path()
        path = self.scope.get('path', '')
        if root_path and path.startswith(root_path):
            return path[len(root_path):]
        return path

    def context_path(self) -> str:
        return self.scope.get('root_path', '')

    def request_uri(self) -> str:
        return self.context_path() + self.servlet_path()

    def auth_type(self) -> Optional[str]:
        authorization = self.request.headers.get('authorization')
        parts = (authorization or '').split(maxsplit=1)
        return parts[0] if parts else None

    def content_type(self) -> Optional[str]:
        return self.request.headers.get('content-type')

    def content_length(self) -> int:
        try:
            return int(self.request.headers['content-length'])
        except (KeyError, ValueError):
            return -1

    def query_string(self) -> Optional[str]:
        query = self.scope.get('query_string', b'')
        return query.decode('latin-1') if query else None

    def remote_user(self) -> Optional[str]:
        principal = self.principal()
        return principal.name if principal else None

    def requested_session_id(self) -> Optional[str]:
        return self.request.cookies.get(self.session_cookie)

    def method(self) -> Optional[str]:
        return self.scope.get('method')

    # LOCAL / REMOTE

    def local_addr(self) -> Optional[str]:
        server = self.scope.get('server')
        return server[0] if server else None

    def local_name(self) -> Optional[str]:
        # No reverse lookup; the bound host is the best local name available
        return self.local_addr()

    def local_port(self) -> int:
        server = self.scope.get('server')
        if not server or server[1] is None:
            return -1
        return server[1]

    def remote_addr(self) -> Optional[str]:
        client = self.request.client
        return client.host if client else None

    def remote_host(self) -> Optional[str]:
        return self.remote_addr()

    def remote_port(self) -> int:
        client = self.request.client
        return client.port if client and client.port is not None else -1

    # ATTRIBUTES

    def _state(self) -> Dict[str, Any]:
        return getattr(self.request.state, '_state', {})

    def attribute_names(self) -> List[str]:
        names = list(self._state())
        if self.certificate_chain() is not None and CERTIFICATE_CHAIN_ATTRIBUTE not in names:
            names.append(CERTIFICATE_CHAIN_ATTRIBUTE)
        return names

    def attribute(self, name: str) -> Any:
        if name == CERTIFICATE_CHAIN_ATTRIBUTE and name not in self._state():
            return self.certificate_chain()
        return self._state().get(name)

    def certificate_chain(self) -> Optional[List[Certificate]]:
        if self._chain is None:
            self._chain = self._load_chain()
        return self._chain

    def _load_chain(self) -> Optional[List[Certificate]]:
        tls = self.scope.get('extensions', {}).get('tls') or {}
        pems = tls.get('client_cert_chain')
        if pems is None and self.client_cert_header:
            bundle = self.request.headers.get(self.client_cert_header)
            if bundle:
                pems = split_pem_bundle(bundle)
        if pems is None:
            return None
        return parse_pem_chain(pems)

    # HEADERS / PARAMETERS

    def header_names(self) -> List[str]:
        return list(dict.fromkeys(self.request.headers.keys()))

    def header_values(self, name: str) -> List[str]:
        return self.sanitizer.sanitize(name, self.request.headers.getlist(name))

    def _collect_parameters(self, form: Optional[FormData]) -> Dict[str, List[str]]:
        parameters: Dict[str, List[str]] = {}
        items = list(self.request.query_params.multi_items())
        if form is not None:
            items.extend(form.multi_items())
        for name, value in items:
            if isinstance(value, UploadFile):
                value = value.filename
            parameters.setdefault(name, []).append(value)
        return parameters

    def parameter_names(self) -> List[str]:
        return list(self._parameters)

    def parameter_values(self, name: str) -> Optional[List[str]]:
        return self._parameters.get(name)

    # PRINCIPAL

    def principal(self) -> Optional[Principal]:
        user = self.scope.get('user')
        if user is None or not getattr(user, 'is_authenticated', False):
            return None
        user_type = type(user)
        return Principal(name=user.display_name, type_name=f'{user_type.__module__}.{user_type.__qualname__}')
