'''
Calculation history, kept in memory and in a plain text log.

One entry per line, as "<expression> = <result>".
'''

from collections import namedtuple
import logging
import os


logger = logging.getLogger(__name__)

SEPARATOR = ' = '
# File name used when exporting into a directory.
EXPORT_NAME = 'log.log'


class HistoryError(Exception):
    pass


class CalculationEntry(namedtuple('CalculationEntry', 'expression result')):
    __slots__ = ()

    def __str__(self):
        return self.expression + SEPARATOR + self.result

    @classmethod
    def parse(cls, line):
        '''
        Parse a log line back into an entry, or None if it isn't one.

        Splits on the first separator, so results may contain one, but
        expressions may not.
        '''
        expression, sep, result = line.rstrip('\r\n').partition(SEPARATOR)
        if not sep:
            return None
        return cls(expression, result)


def parse_indexes(text, size):
    '''
    Parse comma separated entry numbers, e.g. "0, 2, 5".

    Returns the valid indexes, in the order given, and a list of complaints
    about the rest.
    '''
    indexes = []
    complaints = []
    for part in text.split(','):
        part = part.strip()
        try:
            index = int(part)
        except ValueError:
            complaints.append('{!r} is not a number, skipped'.format(part))
            continue
        if 0 <= index < size:
            indexes.append(index)
        else:
            complaints.append('No entry {}, skipped'.format(index))
    return indexes, complaints


class History:
    '''
    Ordered list of successful calculations, mirrored to a log file.
    '''

    def __init__(self, path):
        '''
        Create empty history. Doesn't read the log; see load().

        :param path: Log file; ~ is expanded. None keeps the history in
                     memory only.
        '''
        self.path = os.path.expanduser(path) if path is not None else None
        self.entries = []

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    def load(self):
        '''
        Read entries from the log, replacing those in memory.

        Missing log means empty history. Unreadable log is only warned
        about, also leaving an empty history.
        '''
        self.entries = []
        if self.path is None or not os.path.exists(self.path):
            return self
        try:
            with open(self.path, encoding='utf-8') as fp:
                for line in fp:
                    entry = CalculationEntry.parse(line)
                    if entry is not None:
                        self.entries.append(entry)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('Could not load history from %s: %s',
                           self.path, e)
            self.entries = []
        else:
            logger.debug('Loaded %d entries from %s',
                         len(self.entries), self.path)
        return self

    def record(self, expression, result):
        '''
        Append a calculation and rewrite the log.
        '''
        entry = CalculationEntry(expression, result)
        self.entries.append(entry)
        if self.path is None:
            return entry
        try:
            self._write(self.path, self.entries)
        except OSError as e:
            logger.warning('Could not save history to %s: %s',
                           self.path, e)
        return entry

    def target_path(self, user_input=None):
        '''
        Resolve where an export goes.

        Blank means the log itself; an existing directory gets a log.log in
        it; anything else is taken as a file path.
        '''
        if user_input is None or not user_input.strip():
            if self.path is None:
                raise HistoryError('No history file, give a path to export to')
            return self.path
        path = os.path.expanduser(user_input.strip())
        if os.path.isdir(path):
            return os.path.join(path, EXPORT_NAME)
        return path

    def export(self, target=None):
        '''
        Write all entries to target, returning the absolute path written.
        '''
        path = self.target_path(target)
        self._write(path, self.entries)
        return os.path.abspath(path)

    def export_selected(self, indexes, target=None):
        '''
        Write entries at indexes to target, returning the absolute path
        written. Indexes out of range are ignored.
        '''
        selected = [self.entries[index]
                    for index
                    in indexes
                    if 0 <= index < len(self.entries)]
        if not selected:
            raise HistoryError('No valid entries selected for export')
        path = self.target_path(target)
        self._write(path, selected)
        return os.path.abspath(path)

    def _write(self, path, entries):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as fp:
            for entry in entries:
                print(entry, file=fp)
        logger.debug('Wrote %d entries to %s', len(entries), path)
