import csv
import io
from typing import List


def split_row(text: str, delimiter: str = ",", quotechar: str = '"') -> List[str]:
    '''Split one line of delimited text into fields.

    Quoted fields may contain the delimiter or a line break, and a doubled
    quote inside a quoted field stands for a single quote character:

        >>> split_row('a,"b,c",d')
        ['a', 'b,c', 'd']
        >>> split_row('x|"say ""hi"""|', "|")
        ['x', 'say "hi"', '']

    Raises csv.Error when the text holds more than one record (a line break
    outside quotes) or a field larger than csv.field_size_limit().
    '''
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    if text == "":
        return [""]
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, quotechar=quotechar)
    records = list(reader)
    if len(records) != 1:
        raise csv.Error("new-line character seen in unquoted field")
    return records[0]
