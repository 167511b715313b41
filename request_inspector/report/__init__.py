"""Request report rendering."""

from .dumper import NULL_TEXT, RequestDumper, as_text
from .layout import LayoutConfig
from .view import CERTIFICATE_CHAIN_ATTRIBUTE, Certificate, Principal, RequestView, StaticRequestView

__all__ = [
    'CERTIFICATE_CHAIN_ATTRIBUTE',
    'Certificate',
    'LayoutConfig',
    'NULL_TEXT',
    'Principal',
    'RequestDumper',
    'RequestView',
    'StaticRequestView',
    'as_text',
]
