"""Persistence of rendered request reports."""

from .dump_writer import DumpPathGenerator, DumpWriter

__all__ = ['DumpPathGenerator', 'DumpWriter']
