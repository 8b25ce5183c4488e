"""SQLite data store for StockVision."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from stockvision.models import Candle

logger = logging.getLogger(__name__)


class DataStore:
    """SQLite-based candle and watchlist store."""

    REQUIRED_TABLES = [
        "candles",
        "watchlist",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Candles keyed by their ordering timestamp; datetime is NULL for daily bars
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS candles (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    symbol TEXT NOT NULL,
                    timeframe TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    date TEXT NOT NULL,
                    datetime TEXT,
                    open REAL NOT NULL,
                    high REAL NOT NULL,
                    low REAL NOT NULL,
                    close REAL NOT NULL,
                    volume REAL NOT NULL,
                    UNIQUE(symbol, timeframe, timestamp)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS watchlist (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    symbol TEXT NOT NULL,
                    list_name TEXT NOT NULL DEFAULT 'default',
                    UNIQUE(symbol, list_name)
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Candles ====================

    def save_candles(
        self, symbol: str, timeframe: str, candles: list[Candle]
    ) -> None:
        """Save candles to the database, replacing any with the same timestamp.

        Args:
            symbol: Trading symbol.
            timeframe: Candle timeframe (e.g., '1day', '5min').
            candles: List of candles to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.executemany(
                """
                INSERT OR REPLACE INTO candles
                (symbol, timeframe, timestamp, date, datetime, open, high, low, close, volume)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        symbol,
                        timeframe,
                        candle.timestamp.isoformat(),
                        candle.date.isoformat(),
                        candle.datetime.isoformat() if candle.datetime else None,
                        candle.open,
                        candle.high,
                        candle.low,
                        candle.close,
                        candle.volume,
                    )
                    for candle in candles
                ],
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Saved %d %s candles for %s", len(candles), timeframe, symbol)

    def get_candles(
        self,
        symbol: str,
        timeframe: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[Candle]:
        """Get candles from the database in ascending time order.

        Args:
            symbol: Trading symbol.
            timeframe: Candle timeframe.
            from_date: Optional inclusive start date.
            to_date: Optional inclusive end date.

        Returns:
            List of candles in the date range.
        """
        query = """
            SELECT date, datetime, open, high, low, close, volume
            FROM candles
            WHERE symbol = ? AND timeframe = ?
        """
        params: list = [symbol, timeframe]
        if from_date is not None:
            query += " AND date >= ?"
            params.append(from_date.isoformat())
        if to_date is not None:
            query += " AND date <= ?"
            params.append(to_date.isoformat())
        query += " ORDER BY timestamp"

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [
                Candle(
                    date=date.fromisoformat(row["date"]),
                    datetime=datetime.fromisoformat(row["datetime"]) if row["datetime"] else None,
                    open=row["open"],
                    high=row["high"],
                    low=row["low"],
                    close=row["close"],
                    volume=row["volume"],
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def get_symbols(self, timeframe: Optional[str] = None) -> list[str]:
        """Get all symbols that have stored candles.

        Args:
            timeframe: Optional timeframe filter.

        Returns:
            Sorted list of symbols.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if timeframe:
                cursor.execute(
                    "SELECT DISTINCT symbol FROM candles WHERE timeframe = ? ORDER BY symbol",
                    (timeframe,),
                )
            else:
                cursor.execute("SELECT DISTINCT symbol FROM candles ORDER BY symbol")
            return [row["symbol"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Watchlist ====================

    def add_to_watchlist(self, symbol: str, list_name: str = "default") -> None:
        """Add a symbol to a watchlist.

        Args:
            symbol: Symbol to add.
            list_name: Name of the watchlist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR IGNORE INTO watchlist (symbol, list_name)
                VALUES (?, ?)
                """,
                (symbol, list_name),
            )
            conn.commit()
        finally:
            conn.close()

    def remove_from_watchlist(self, symbol: str, list_name: str = "default") -> None:
        """Remove a symbol from a watchlist.

        Args:
            symbol: Symbol to remove.
            list_name: Name of the watchlist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM watchlist WHERE symbol = ? AND list_name = ?",
                (symbol, list_name),
            )
            conn.commit()
        finally:
            conn.close()

    def get_watchlist(self, list_name: str = "default") -> list[str]:
        """Get all symbols in a watchlist, in insertion order."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT symbol FROM watchlist WHERE list_name = ? ORDER BY id",
                (list_name,),
            )
            return [row["symbol"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_watchlist_names(self) -> list[str]:
        """Get all watchlist names."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT DISTINCT list_name FROM watchlist")
            return [row["list_name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Row counts per table."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) AS n FROM {table}")
                stats[table] = cursor.fetchone()["n"]
            cursor.execute("SELECT COUNT(DISTINCT symbol) AS n FROM candles")
            stats["symbols"] = cursor.fetchone()["n"]
            return stats
        finally:
            conn.close()
