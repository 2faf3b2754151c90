"""
Text tokenization helpers shared by the analyzers.
"""

import re

WORD_PATTERN = re.compile(r"\b\w+(?:['’]\w+)*\b")
SENTENCE_SPLIT_PATTERN = re.compile(r"(?<=[.!?])\s+")
HEADING_PATTERN = re.compile(r"^\s{0,3}#{1,6}\s+\S|<h[1-6][\s>]", re.IGNORECASE | re.MULTILINE)

STOP_WORDS = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "also", "am", "an",
    "and", "any", "are", "as", "at", "be", "because", "been", "before", "being",
    "below", "between", "both", "but", "by", "can", "could", "did", "do", "does",
    "doing", "down", "during", "each", "few", "for", "from", "further", "had",
    "has", "have", "having", "he", "her", "here", "hers", "him", "his", "how",
    "i", "if", "in", "into", "is", "it", "its", "itself", "just", "may", "me",
    "might", "more", "most", "must", "my", "no", "nor", "not", "now", "of", "off",
    "on", "once", "only", "or", "other", "our", "ours", "out", "over", "own",
    "same", "she", "should", "so", "some", "such", "than", "that", "the", "their",
    "theirs", "them", "then", "there", "these", "they", "this", "those", "through",
    "to", "too", "under", "until", "up", "very", "was", "we", "were", "what",
    "when", "where", "which", "while", "who", "whom", "why", "will", "with",
    "would", "you", "your", "yours",
})


def extract_words(text: str, lowercase: bool = True) -> list[str]:
    """
    Split text into word tokens.

    Args:
        text: Text to tokenize.
        lowercase: Whether to lowercase the tokens.

    Returns:
        List of word tokens (punctuation dropped).
    """
    if not text:
        return []
    words = WORD_PATTERN.findall(text)
    if lowercase:
        return [w.lower() for w in words]
    return words


def count_words(text: str) -> int:
    """Count word tokens in text."""
    return len(extract_words(text, lowercase=False))


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences on terminal punctuation and line breaks.

    Args:
        text: Text to split.

    Returns:
        Non-empty, stripped sentences with their punctuation kept.
    """
    return [sentence for _, _, sentence in sentence_spans(text)]


def sentence_spans(text: str) -> list[tuple[int, int, str]]:
    """
    Locate sentences in text.

    Args:
        text: Text to split.

    Returns:
        (start, end, sentence) per sentence, where text[start:end] == sentence.
        Same sentences, in the same order, as split_sentences().
    """
    if not text:
        return []
    spans = []
    offset = 0
    for line in text.splitlines(keepends=True):
        start = 0
        separators = list(SENTENCE_SPLIT_PATTERN.finditer(line))
        for separator in separators + [None]:
            end = separator.start() if separator else len(line)
            chunk = line[start:end]
            sentence = chunk.strip()
            if sentence:
                begin = offset + start + len(chunk) - len(chunk.lstrip())
                spans.append((begin, begin + len(sentence), sentence))
            if separator:
                start = separator.end()
        offset += len(line)
    return spans


def split_paragraphs(text: str) -> list[str]:
    """Split text into paragraphs separated by blank lines."""
    return [p.strip() for p in re.split(r"\n\s*\n", text or "") if p.strip()]


def has_headings(text: str) -> bool:
    """Check for markdown heading lines or HTML heading tags."""
    return bool(HEADING_PATTERN.search(text or ""))


def content_words(text: str, min_length: int = 3) -> list[str]:
    """Lowercased tokens that are not stop words, numbers or very short."""
    return [
        w for w in extract_words(text)
        if len(w) >= min_length and w not in STOP_WORDS and not w.isdigit()
    ]


def count_phrase(text: str, phrase: str) -> int:
    """Count case-insensitive substring occurrences of a phrase."""
    if not text or not phrase or not phrase.strip():
        return 0
    return len(re.findall(re.escape(phrase.strip()), text, re.IGNORECASE))
