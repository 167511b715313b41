from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """Separators a report is rendered with.

    Values are used verbatim. Empty strings are legal and give compact output.
    """

    line_end: str = '\n'
    indent: str = '  '
    section_break: str = '\n== '
    name_value_separator: str = '='
    value_separator: str = ';'

    @classmethod
    def compact(cls) -> 'LayoutConfig':
        return cls(line_end='', indent='', section_break='', name_value_separator='', value_separator='')
