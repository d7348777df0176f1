"""
Google Sheets client for fetching the progression spreadsheet.

Provides methods for reading the raw cell grid from Google Sheets,
either via API (requires credentials) or from exported TSV/CSV files.
"""

import csv
import logging
from pathlib import Path
from typing import Any, List, Optional

from .cache import SheetCache
from .config import SheetsConfig, CacheConfig


logger = logging.getLogger(__name__)


class SheetsError(RuntimeError):
    """Raised when the spreadsheet cannot be fetched and nothing is cached."""


class GoogleSheetsClient:
    """
    Client for fetching raw rows from the Google Sheets API.

    Fetched rows are kept in a SheetCache; while the snapshot is fresh
    no request is made, and if a request fails the last snapshot is
    returned even when expired.
    """

    def __init__(self, config: SheetsConfig, cache: Optional[SheetCache] = None):
        """
        Initialize Google Sheets client.

        Parameters:
            config: Sheet ID, range and service account credentials.
            cache: Snapshot cache. Defaults to one with the configured
                   CACHE_DURATION.
        """
        self._config = config
        self._cache = cache or SheetCache(CacheConfig.from_env().ttl_seconds)
        self._service = None

    @property
    def cache(self) -> SheetCache:
        return self._cache

    def _get_credentials(self):
        """
        Build service account credentials from the configuration.

        Returns:
            Google credentials object.

        Raises:
            ValueError: If no credentials are configured.
        """
        try:
            from google.oauth2.service_account import Credentials
        except ImportError:
            raise ImportError(
                "google-auth not installed. Run: pip install google-auth google-api-python-client"
            )

        scopes = list(self._config.scopes)
        if self._config.service_account_info:
            return Credentials.from_service_account_info(
                self._config.service_account_info, scopes=scopes
            )
        if self._config.credentials_file:
            return Credentials.from_service_account_file(
                str(self._config.credentials_file), scopes=scopes
            )

        raise ValueError("No Google credentials configured")

    def _get_service(self):
        """
        Get or create Google Sheets API service.

        Returns:
            Google Sheets API service object.
        """
        if self._service is None:
            try:
                from googleapiclient.discovery import build
            except ImportError:
                raise ImportError(
                    "google-api-python-client not installed. "
                    "Run: pip install google-api-python-client"
                )

            creds = self._get_credentials()
            self._service = build("sheets", "v4", credentials=creds)
            logger.info("Google Sheets authentication successful")

        return self._service

    def list_sheet_titles(self) -> List[str]:
        """
        Fetch the tab names of the spreadsheet.

        Returns:
            Sheet titles in spreadsheet order.
        """
        service = self._get_service()
        metadata = (
            service.spreadsheets()
            .get(spreadsheetId=self._config.sheet_id, fields="sheets.properties.title")
            .execute()
        )
        return [s["properties"]["title"] for s in metadata.get("sheets", [])]

    def _resolve_range(self) -> str:
        """
        Pick the range to read, falling back to the first tab when the
        configured tab does not exist.
        """
        rng = self._config.range_name
        try:
            titles = self.list_sheet_titles()
        except Exception as e:
            logger.error(f"Error fetching spreadsheet metadata: {e}")
            return rng

        logger.debug(f"Available sheets: {titles}")
        if self._config.tab_name not in titles and titles:
            fallback = f"{titles[0]}!{self._config.cell_range}"
            logger.warning(
                f"Sheet '{self._config.tab_name}' not found, "
                f"trying first available sheet: {titles[0]}"
            )
            return fallback
        return rng

    def fetch_sheet_data(self, force_refresh: bool = False) -> List[List[str]]:
        """
        Fetch raw data from the spreadsheet.

        Parameters:
            force_refresh: Ignore a fresh cached snapshot.

        Returns:
            List of rows, where each row is a list of cell values.

        Raises:
            SheetsError: If the request fails and nothing has been cached.
        """
        if not force_refresh:
            cached = self._cache.get()
            if cached is not None:
                logger.debug("Using cached sheet data")
                return cached

        sid = self._config.sheet_id
        try:
            rng = self._resolve_range()
            logger.info(f"Fetching data from Google Sheet: {sid}, range: {rng}")

            service = self._get_service()
            result = service.spreadsheets().values().get(spreadsheetId=sid, range=rng).execute()
        except Exception as e:
            logger.error(f"Error fetching sheet data from {sid}: {e}")
            if "404" in str(e):
                logger.error(
                    "404 usually means the spreadsheet ID is wrong, the service "
                    "account has no access to the spreadsheet, or the sheet tab "
                    "does not exist"
                )

            stale = self._cache.get_stale()
            if stale is not None:
                logger.warning("Returning cached data due to error")
                return stale
            raise SheetsError(f"Failed to fetch sheet {sid}: {e}") from e

        rows = result.get("values", [])
        logger.info(f"Fetched {len(rows)} rows from Google Sheets")
        self._cache.put(rows)
        return rows

    @staticmethod
    def is_available() -> bool:
        """
        Check if Google Sheets API credentials are available.

        Returns:
            True if credentials are configured, False otherwise.
        """
        try:
            SheetsConfig.from_env()
        except ValueError:
            return False
        return True


def load_grid_from_file(filepath: Path) -> List[List[str]]:
    """
    Load the raw grid from a TSV/CSV export of the spreadsheet.

    Parameters:
        filepath: Path to export file. ".tsv" files are tab-delimited.

    Returns:
        List of rows, where each row is a list of cell values.

    Raises:
        FileNotFoundError: If file does not exist.
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Sheet export not found: {filepath}")

    delimiter = "\t" if filepath.suffix == ".tsv" else ","
    with open(filepath, newline="", encoding="utf-8") as f:
        rows = [row for row in csv.reader(f, delimiter=delimiter)]

    logger.info(f"Loaded {len(rows)} rows from {filepath}")
    return rows


def save_grid_to_file(rows: List[List[Any]], filepath: Path) -> None:
    """
    Write the raw grid to a TSV/CSV file for offline use.

    Parameters:
        rows: Grid rows as fetched from the API.
        filepath: Destination path. ".tsv" files are tab-delimited.
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    delimiter = "\t" if filepath.suffix == ".tsv" else ","
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        csv.writer(f, delimiter=delimiter).writerows(rows)

    logger.info(f"Saved {len(rows)} rows to {filepath}")


def load_grid(
    filepath: Optional[Path] = None,
    use_api: bool = False,
    client: Optional[GoogleSheetsClient] = None,
) -> List[List[str]]:
    """
    Load the raw grid from either Google Sheets API or a local file.

    Tries the API first if use_api=True and credentials are available,
    otherwise falls back to the local file.

    Parameters:
        filepath: Path to local TSV/CSV export (fallback).
        use_api: Whether to try Google Sheets API first.
        client: Preconfigured client; built from the environment if omitted.

    Returns:
        List of rows, empty if no source is available.

    Raises:
        SheetsError: If the API was tried and failed and there is no
                     local file to fall back to.
    """
    api_error = None
    if use_api and (client is not None or GoogleSheetsClient.is_available()):
        try:
            client = client or GoogleSheetsClient(SheetsConfig.from_env())
            rows = client.fetch_sheet_data()
            if rows:
                return rows
            logger.warning("No rows from API, falling back to file")
        except (SheetsError, ValueError) as e:
            logger.warning(f"Google Sheets API error: {e}, falling back to file")
            api_error = e

    if filepath and filepath.exists():
        return load_grid_from_file(filepath)

    if api_error is not None:
        raise api_error

    logger.warning("No sheet data source available")
    return []
