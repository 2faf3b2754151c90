"""
Keyword and LSI term loading from CSV and Excel files.

This module handles ingestion of:
- LSI term lists with optional relevance / semantic score columns
- Plain keyword lists (first matching keyword column)
"""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .models import LSIKeyword

logger = logging.getLogger(__name__)


class KeywordLoadError(Exception):
    """Raised when keyword loading fails."""
    pass


# Common column name variations for keyword data
TERM_COLUMN_VARIANTS = ["term", "terms", "keyword", "keywords", "phrase", "query", "lsi_term"]
RELEVANCE_COLUMN_VARIANTS = ["relevance", "relevance_score", "weight"]
SEMANTIC_COLUMN_VARIANTS = ["semantic_score", "semanticscore", "score", "similarity"]
CONTEXT_COLUMN_VARIANTS = ["context_strength", "contextstrength", "context"]


def _normalize_column_name(name: str) -> str:
    """Normalize column name for matching."""
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """
    Find a column in the DataFrame matching one of the variant names.

    Args:
        df: The DataFrame to search.
        variants: List of possible column name variants.

    Returns:
        The actual column name if found, None otherwise.
    """
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}

    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]

    return None


def _read_table(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> pd.DataFrame:
    """
    Read a CSV or Excel file into a DataFrame.

    Raises:
        KeywordLoadError: If the file is missing, unsupported or unreadable.
    """
    path = Path(file_path)

    if not path.exists():
        raise KeywordLoadError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        try:
            df = pd.read_csv(path, encoding="utf-8")
        except UnicodeDecodeError:
            # Try alternative encoding
            try:
                df = pd.read_csv(path, encoding="latin-1")
            except Exception as e:
                raise KeywordLoadError(f"Failed to read CSV file: {e}")
        except Exception as e:
            raise KeywordLoadError(f"Failed to read CSV file: {e}")
    elif suffix in (".xlsx", ".xls"):
        try:
            if sheet_name:
                df = pd.read_excel(path, sheet_name=sheet_name)
            else:
                df = pd.read_excel(path)
        except Exception as e:
            raise KeywordLoadError(f"Failed to read Excel file: {e}")
    else:
        raise KeywordLoadError(
            f"Unsupported file format: {suffix}. Supported formats: .csv, .xlsx, .xls"
        )

    if df.empty:
        raise KeywordLoadError("Keyword file is empty")
    return df


def _score(row: pd.Series, column: Optional[str], default: float) -> float:
    if column is None or pd.isna(row[column]):
        return default
    try:
        value = float(row[column])
    except (ValueError, TypeError):
        return default
    # Accept percentages (0-100) as well as fractions
    if value > 1:
        value /= 100
    return max(0.0, min(1.0, value))


def _term_column(df: pd.DataFrame) -> str:
    column = _find_column(df, TERM_COLUMN_VARIANTS)
    if column is None:
        raise KeywordLoadError(
            f"No keyword column found. Expected one of: {', '.join(TERM_COLUMN_VARIANTS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )
    return column


def load_lsi_keywords(
    file_path: Union[str, Path], sheet_name: Optional[str] = None
) -> list[LSIKeyword]:
    """
    Load LSI terms from a CSV or Excel file.

    Missing score columns default to relevance 1.0, semantic_score 1.0 and
    context_strength 0.0. Scores above 1 are read as percentages.

    Args:
        file_path: Path to the term file.
        sheet_name: Optional sheet name for Excel files.

    Returns:
        List of LSIKeyword objects, de-duplicated case-insensitively.

    Raises:
        KeywordLoadError: If the file cannot be read or holds no terms.
    """
    df = _read_table(file_path, sheet_name)
    term_col = _term_column(df)
    relevance_col = _find_column(df, RELEVANCE_COLUMN_VARIANTS)
    semantic_col = _find_column(df, SEMANTIC_COLUMN_VARIANTS)
    context_col = _find_column(df, CONTEXT_COLUMN_VARIANTS)

    keywords: list[LSIKeyword] = []
    seen: set[str] = set()

    for _, row in df.iterrows():
        term = row[term_col]
        if pd.isna(term) or not str(term).strip():
            continue
        term = str(term).strip()
        if term.lower() in seen:
            continue
        seen.add(term.lower())

        keywords.append(
            LSIKeyword(
                term=term,
                relevance=_score(row, relevance_col, 1.0),
                semantic_score=_score(row, semantic_col, 1.0),
                context_strength=_score(row, context_col, 0.0),
            )
        )

    if not keywords:
        raise KeywordLoadError("No valid keywords found in file")

    logger.info(f"Loaded {len(keywords)} LSI term(s) from {file_path}")
    return keywords


def load_keyword_list(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[str]:
    """
    Load a plain list of keywords from a CSV or Excel file.

    Args:
        file_path: Path to the keyword file.
        sheet_name: Optional sheet name for Excel files.

    Returns:
        Keywords in file order, de-duplicated case-insensitively.

    Raises:
        KeywordLoadError: If the file cannot be read or holds no keywords.
    """
    df = _read_table(file_path, sheet_name)
    term_col = _term_column(df)

    keywords: list[str] = []
    seen: set[str] = set()
    for value in df[term_col]:
        if pd.isna(value) or not str(value).strip():
            continue
        phrase = str(value).strip()
        if phrase.lower() not in seen:
            seen.add(phrase.lower())
            keywords.append(phrase)

    if not keywords:
        raise KeywordLoadError("No valid keywords found in file")

    return keywords
