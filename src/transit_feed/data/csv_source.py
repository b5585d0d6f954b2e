"""Row source for GTFS text files stored in a directory or a ZIP archive."""

import csv
import io
import zipfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from transit_feed.errors import FeedFileError


class FeedSource:
    """Reads feed files as dicts of column name -> raw string value.

    Rows are yielded in on-disk order together with the file line number
    the row starts on (the header is line 1). Every column named in the
    header is present in each row (short rows are padded with ""); columns
    the header does not declare are absent.

    Usage:
        source = FeedSource(Path("data/gtfs"))
        for line_number, row in source.read_rows("routes.txt", required=["route_id"]):
            ...
    """

    def __init__(self, feed_path: Path):
        """Initialize the source.

        Args:
            feed_path: GTFS directory or ZIP file.
        """
        self.feed_path = Path(feed_path)

    @property
    def is_zip(self) -> bool:
        return self.feed_path.is_file() and self.feed_path.suffix == ".zip"

    def read_rows(
        self, filename: str, required: Iterable[str] = ()
    ) -> Iterator[tuple[int, dict[str, str]]]:
        """Yield (line_number, row) for every data row of a feed file.

        Line numbers count physical lines, so blank lines and quoted cells
        spanning several lines are accounted for.

        Args:
            filename: File name relative to the feed root (e.g. "trips.txt").
            required: Columns that must appear in the header.

        Raises:
            FeedFileError: If the file is missing or unreadable, has no header,
                or lacks a required column. Raised on first iteration.
        """
        if self.is_zip:
            yield from self._read_rows_from_zip(filename, list(required))
        else:
            yield from self._read_rows_from_dir(filename, list(required))

    def _read_rows_from_dir(
        self, filename: str, required: list[str]
    ) -> Iterator[tuple[int, dict[str, str]]]:
        csv_path = self.feed_path / filename
        try:
            f = open(csv_path, encoding="utf-8-sig", newline="")
        except OSError as e:
            raise FeedFileError(filename, f"cannot open {csv_path}: {e.strerror or e}") from e

        with f:
            yield from self._read_csv(f, filename, required)

    def _read_rows_from_zip(
        self, filename: str, required: list[str]
    ) -> Iterator[tuple[int, dict[str, str]]]:
        try:
            zf = zipfile.ZipFile(self.feed_path, "r")
        except (OSError, zipfile.BadZipFile) as e:
            raise FeedFileError(filename, f"cannot open archive {self.feed_path}: {e}") from e

        with zf:
            if filename not in zf.namelist():
                raise FeedFileError(filename, f"not found in {self.feed_path.name}")
            with zf.open(filename) as f:
                text_file = io.TextIOWrapper(f, encoding="utf-8-sig", newline="")
                yield from self._read_csv(text_file, filename, required)

    def _read_csv(
        self, text_file: io.TextIOBase, filename: str, required: list[str]
    ) -> Iterator[tuple[int, dict[str, str]]]:
        reader = csv.reader(text_file)
        try:
            header = self._build_header(reader, filename, required)
            last_line = reader.line_num
            for row in reader:
                start_line, last_line = last_line + 1, reader.line_num
                # Skip blank lines
                if not row:
                    continue
                yield start_line, self._row_from_header(row, header)
        except (csv.Error, UnicodeDecodeError) as e:
            raise FeedFileError(filename, f"malformed CSV: {e}") from e

    def _build_header(
        self, reader: Iterator[list[str]], filename: str, required: list[str]
    ) -> list[str]:
        """Read and validate the header row."""
        header = next(reader, None)
        if header is None:
            raise FeedFileError(filename, "file is empty")
        names = [name.strip() for name in header]
        missing = [col for col in required if col not in names]
        if missing:
            raise FeedFileError(filename, f"missing columns: {', '.join(missing)}")
        return names

    def _row_from_header(self, row: list[str], header: list[str]) -> dict[str, str]:
        """Map a CSV row list to a dict by header position."""
        row_dict: dict[str, str] = {}
        for idx, name in enumerate(header):
            # First occurrence wins for duplicated header names
            if name not in row_dict:
                row_dict[name] = row[idx] if idx < len(row) else ""
        return row_dict
