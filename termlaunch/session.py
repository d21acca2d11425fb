"""
The state machine behind the interactive menu.

A `Session` owns the query text, the list of filtered catalog indices, the
highlighted position inside that list and the scroll offset. It is fed with
events (see `translate_key()` in `termlaunch.tui`) and tells when it has come
to an end by returning an outcome from `handle()`.
"""
from collections import namedtuple

# termlaunch package
from . import settings
from .core import adjust_offset, get_filtered_indices, get_visible_range

# Event kinds
MOVE_UP = 'move-up'
MOVE_DOWN = 'move-down'
PAGE_UP = 'page-up'
PAGE_DOWN = 'page-down'
COMMIT = 'commit'
CANCEL = 'cancel'
BACKSPACE = 'backspace'
APPEND_CHAR = 'append-char'
IGNORED = 'ignored'

# Outcomes
Committed = namedtuple('Committed', 'index')
Cancelled = namedtuple('Cancelled', '')

# What the display needs to know in order to draw the menu
Row = namedtuple('Row', 'entry highlighted')
RenderModel = namedtuple(
    'RenderModel', 'rows query filtered_count total_count offset capacity')

def is_printable(char):
    """
    Return True if `char` is a single printable ASCII character.
    """
    return len(char) == 1 and ' ' <= char <= '~'

class Session:
    """
    Incremental search over a catalog of application entries.
    """
    def __init__(self, catalog, capacity=1, page_size=None,
                       max_query_length=None):
        """
        Setup a session for `catalog`, which is expected to be a sorted
        sequence of `AppEntry`-instances that won't change anymore.

        `capacity` is the number of rows the display can show at once. The
        session scrolls so that the highlighted row stays inside that window.
        `page_size` and `max_query_length` default to the values given by
        `settings.config`.
        """
        if page_size is None:
            page_size = settings.config['page-size']
        if max_query_length is None:
            max_query_length = settings.config['max-query-length']
        self.catalog = catalog
        self.capacity = max(capacity, 1)
        self.page_size = page_size
        self.max_query_length = max_query_length
        self.query = ''
        self.highlight = 0
        self.offset = 0
        self.filtered = get_filtered_indices(catalog, self.query)
        self.outcome = None

    @property
    def filtered_count(self):
        return len(self.filtered)

    @property
    def finished(self):
        return self.outcome is not None

    @property
    def selected_entry(self):
        """
        Return the catalog entry that was chosen by a commit, or `None` if
        the session is still running or has been cancelled.
        """
        if isinstance(self.outcome, Committed):
            return self.catalog[self.outcome.index]
        return None

    def handle(self, kind, char=None):
        """
        Process an event of the given `kind`. `char` is only used together
        with `APPEND_CHAR`. Events whose precondition is not met, unknown
        kinds and anything arriving after the session has finished are
        ignored.

        Return the session's outcome (`Committed` or `Cancelled`) once it
        has ended, otherwise `None`.
        """
        if self.finished:
            return self.outcome
        count = self.filtered_count
        if kind == MOVE_UP:
            if self.highlight > 0:
                self.highlight -= 1
        elif kind == MOVE_DOWN:
            if self.highlight < count - 1:
                self.highlight += 1
        elif kind == PAGE_DOWN:
            if count > 0:
                self.highlight = min(self.highlight + self.page_size, count - 1)
        elif kind == PAGE_UP:
            if count > 0:
                self.highlight = max(self.highlight - self.page_size, 0)
        elif kind == COMMIT:
            if 0 <= self.highlight < count:
                self.outcome = Committed(self.filtered[self.highlight])
        elif kind == CANCEL:
            self.outcome = Cancelled()
        elif kind == BACKSPACE:
            if self.query:
                self.set_query(self.query[:-1])
        elif kind == APPEND_CHAR:
            if (char is not None and is_printable(char) and
                    len(self.query) < self.max_query_length):
                self.set_query(self.query + char)
        self.offset = adjust_offset(self.offset, self.highlight, self.capacity)
        return self.outcome

    def set_query(self, query):
        """
        Replace the query, rebuild the filtered list and jump back to its top.
        """
        self.query = query
        self.filtered = get_filtered_indices(self.catalog, query)
        self.highlight = 0
        self.offset = 0

    def resize(self, capacity):
        """
        Change the number of visible rows and scroll if needed.
        """
        self.capacity = max(capacity, 1)
        self.offset = adjust_offset(self.offset, self.highlight, self.capacity)

    def render(self):
        """
        Return a `RenderModel` describing what should be visible right now.
        """
        self.offset = adjust_offset(self.offset, self.highlight, self.capacity)
        rows = [Row(self.catalog[self.filtered[position]],
                    position == self.highlight)
                for position in get_visible_range(
                    self.offset, self.filtered_count, self.capacity)]
        return RenderModel(rows, self.query, self.filtered_count,
                           len(self.catalog), self.offset, self.capacity)
