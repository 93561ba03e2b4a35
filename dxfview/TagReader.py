# TagReader - DXF group-code / value pair reader
#
# An ASCII DXF file is a flat sequence of line pairs: an integer group
# code followed by its value. This module only splits the text into
# those pairs. It knows nothing about sections or entities and never
# fails: malformed trailing lines simply end the stream early.

import re

_NEWLINE = re.compile(r"\r?\n")
_BOM = "\ufeff"


def split_lines(text):
    """Split file contents into lines, dropping a leading byte-order mark."""
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return _NEWLINE.split(text)


def parse_code(line):
    """Return the integer group code of a code line, or None."""
    try:
        return int(line)
    except ValueError:
        return None


class TagStream:
    """Cursor over the (code, value) pairs of a DXF text.

    The cursor advances two lines at a time. Both lines are stripped
    of surrounding whitespace; the value is returned as a string and
    numeric conversion is left to the caller.
    """

    def __init__(self, text):
        self._lines = split_lines(text)
        self._pos = 0

    @property
    def position(self):
        """Index of the next code line."""
        return self._pos

    def at_end(self):
        return self._pos + 1 >= len(self._lines)

    def next_tag(self):
        """Return the next (code, value) pair, or None at end of stream.

        A code line that is not an integer gives code None; the value
        line is still consumed so the stream stays aligned.
        """
        if self.at_end():
            self._pos = len(self._lines)
            return None
        code = parse_code(self._lines[self._pos].strip())
        value = self._lines[self._pos + 1].strip()
        self._pos += 2
        return code, value

    def __iter__(self):
        while True:
            tag = self.next_tag()
            if tag is None:
                return
            yield tag


def read_tags(text):
    """Return the complete list of (code, value) pairs of a DXF text."""
    return list(TagStream(text))
