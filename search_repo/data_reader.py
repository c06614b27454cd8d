"""Tabular row sources for ingestion."""

from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from pathlib import Path
from typing import Any, TypedDict

import pandas as pd

from search_repo.interfaces import IReporter


class FileFormat(Enum):
    EXCEL = "excel"
    CSV = "csv"
    JSON_LINES = "jsonl"


FILE_FORMATS = {
    ".xlsx": FileFormat.EXCEL,
    ".xls": FileFormat.EXCEL,
    ".csv": FileFormat.CSV,
    ".jsonl": FileFormat.JSON_LINES,
    ".ndjson": FileFormat.JSON_LINES,
}


class TransformationParams(TypedDict):  # noqa: D101
    columns: list[str]
    callback: Callable[[str, str], Any | None]


class DataReader(Iterable[tuple[int, pd.Series]]):
    """Rows of a CSV, Excel or JSON lines file, loaded into a DataFrame.

    ``skip_rows`` and ``limit_rows`` count data rows; the header row of CSV
    and Excel files is always kept. Each transformation rewrites the non-empty
    cells of its columns with ``callback(value, column)``.
    """

    def __init__(
        self,
        *,
        file_path: str,
        limit_rows: int | None = None,
        reporter: IReporter,
        skip_rows: int = 0,
        transformations: list[TransformationParams] | None = None,
    ) -> None:
        self._file_path = file_path
        self._limit_rows = limit_rows
        self._skip_rows = skip_rows
        self._file_format = self._parse_file_format()
        self._reporter = reporter
        self.df = self._parse_file_content()

        for params in transformations or []:
            self._transform_columns(params)

    def __iter__(self) -> Iterator[tuple[int, pd.Series]]:
        yield from self.df.iterrows()

    def __getitem__(self, index: int) -> pd.Series:
        return self.df.iloc[index]

    def __len__(self) -> int:
        return len(self.df)

    def records(self) -> list[dict[str, Any]]:
        """Return every row as a dict keyed by column name."""
        return self.df.to_dict("records")

    def _parse_file_format(self) -> FileFormat:
        suffix = Path(self._file_path).suffix.lower()
        if suffix not in FILE_FORMATS:
            supported = ", ".join(extension.lstrip(".") for extension in FILE_FORMATS)
            raise ValueError(
                f"Unsupported file format: {suffix.lstrip('.')}. Supported formats: {supported}"
            )
        return FILE_FORMATS[suffix]

    def _parse_file_content(self, *, encoding: str = "utf-8") -> pd.DataFrame:
        try:
            match self._file_format:
                case FileFormat.EXCEL:
                    return self._read_excel()
                case FileFormat.JSON_LINES:
                    return self._read_json_lines(encoding)
                case _:
                    return self._read_csv(encoding)
        except UnicodeDecodeError:
            self._reporter.on_message("UTF-8 encoding failed, trying with latin-1 encoding...")
            return self._parse_file_content(encoding="latin-1")
        except pd.errors.EmptyDataError as e:
            raise ValueError("The file appears to be empty") from e
        except Exception as e:
            raise ValueError(f"Error reading file: {e!s}") from e

    @property
    def _skipped_data_rows(self) -> range | None:
        return range(1, self._skip_rows + 1) if self._skip_rows > 0 else None

    def _read_csv(self, encoding: str) -> pd.DataFrame:
        return pd.read_csv(
            self._file_path,
            nrows=self._limit_rows,
            skiprows=self._skipped_data_rows,
            encoding=encoding,
        )

    def _read_excel(self) -> pd.DataFrame:
        return pd.read_excel(
            self._file_path, nrows=self._limit_rows, skiprows=self._skipped_data_rows
        )

    def _read_json_lines(self, encoding: str) -> pd.DataFrame:
        # dtype=False keeps string ids such as "007" as strings
        df = pd.read_json(self._file_path, lines=True, dtype=False, encoding=encoding)
        end = None if self._limit_rows is None else self._skip_rows + self._limit_rows
        return df.iloc[self._skip_rows : end].reset_index(drop=True)

    def _transform_columns(self, params: TransformationParams) -> None:
        for column in params["columns"]:
            if column not in self.df.columns:
                self._reporter.on_message(
                    f"Warning: Column '{column}' not found in {self._file_path}. Skipping."
                )
                continue

            def transform(value: Any, name: str = column) -> Any | None:
                if not isinstance(value, (list, dict)) and pd.isna(value):
                    return None
                return params["callback"](str(value), name)

            self.df[column] = self.df[column].apply(transform)
            self._reporter.on_message(f"Parsed column '{column}'")
