"""
Port (interface) for the ticker symbol directory.
Infrastructure adapters (e.g. NasdaqSymbolDirectory) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISymbolDirectory(ABC):
    @abstractmethod
    def exists(self, symbol: str) -> bool:
        """Return True iff *symbol* is listed (exact, case-sensitive).

        Fail-closed: any lookup failure returns False instead of raising.
        """
        ...

    @abstractmethod
    def display_name(self, symbol: str) -> str:
        """Return the company name listed for *symbol*.

        Fail-open: any lookup failure, or no match, returns *symbol* unchanged.
        """
        ...
