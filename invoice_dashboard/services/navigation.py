from abc import ABC, abstractmethod


class RedirectRequested(Exception):
    """Raised to abandon the current handler and send the client elsewhere."""

    def __init__(self, url: str) -> None:
        super().__init__(url)
        self.url = url


class Navigator(ABC):
    @abstractmethod
    def redirect(self, url: str) -> None:
        raise NotImplementedError


class RaisingNavigator(Navigator):
    def redirect(self, url: str) -> None:
        raise RedirectRequested(url)
