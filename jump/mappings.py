import logging
import re

logger = logging.getLogger(__name__)

# name -> {character: alternate characters}
_MAPPINGS = {}


def register(name, table):
    """Make an alternate-character table available under `name` for Options.match_mappings."""
    _MAPPINGS[name] = dict(table)


def unregister(name):
    _MAPPINGS.pop(name, None)


def checkout(pat, opts):
    """Alternate regex for `pat` built from the enabled mapping tables.

    Every character with alternates becomes a character class holding itself and
    its alternates; the rest is escaped. Returns '' when nothing in `pat` is mapped.
    """
    tables = []
    for name in opts.match_mappings:
        table = _MAPPINGS.get(name)
        if table is None:
            logger.warning("Unknown mapping table '%s', skipped.", name)
            continue
        tables.append(table)

    if not tables:
        return ''

    mapped = False
    parts = []
    for char in pat:
        alternates = ''.join(table.get(char, '') for table in tables)
        if alternates:
            mapped = True
            parts.append('[' + ''.join(re.escape(c) for c in char + alternates) + ']')
        else:
            parts.append(re.escape(char))

    return ''.join(parts) if mapped else ''
