class LatestOnlySequencer:
    """
    Hands out monotonically increasing tokens so that, of several overlapping
    refreshes, only the most recently started one is applied.

    A refresh takes a token before it starts fetching and checks
    ``is_current`` before publishing its result.
    """

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def next_token(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest
