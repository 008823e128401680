from typing import List


class Navigator:
    """Keeps the current client-side location and the pages visited."""

    def __init__(self, path: str = "/"):
        self.path = path
        self.history: List[str] = [path]

    def push(self, path: str) -> None:
        self.path = path
        self.history.append(path)
