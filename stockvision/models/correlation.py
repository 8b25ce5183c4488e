"""CorrelationMatrix data model."""

from pydantic import BaseModel, Field


class CorrelationMatrix(BaseModel):
    """Symmetric ticker-by-ticker correlation of daily returns.

    Index it like a nested mapping: ``matrix["AAPL"]["MSFT"]``.
    """

    tickers: tuple[str, ...] = Field(..., description="Tickers in input order")
    values: dict[str, dict[str, float]] = Field(
        ..., description="Row-major coefficients in [-1, 1]"
    )

    model_config = {"frozen": True}

    def __getitem__(self, ticker: str) -> dict[str, float]:
        return self.values[ticker]

    def __contains__(self, ticker: object) -> bool:
        return ticker in self.values

    def get(self, a: str, b: str) -> float:
        """Coefficient for a ticker pair (order does not matter)."""
        return self.values[a][b]

    def pairs(self) -> list[tuple[str, str, float]]:
        """Each unordered off-diagonal pair once, in input order."""
        result = []
        for i, a in enumerate(self.tickers):
            for b in self.tickers[i + 1:]:
                result.append((a, b, self.values[a][b]))
        return result
