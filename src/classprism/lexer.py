"""Split a class string into whitespace-delimited tokens."""

from __future__ import annotations

from classprism.tokens import VALUE_QUOTE_CHARS, ClassToken, next_quote_state


class TokenScanner:
    """Split class-string text into tokens, keeping arbitrary values whole.

    Whitespace is a boundary only outside ``[...]``. Inside brackets, quoted
    substrings hide whitespace and brackets as well. An unclosed bracket
    extends the last token to the end of the text.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens: list[ClassToken] = []
        self._start: int | None = None
        self._depth = 0
        self._quote: str | None = None

    def scan(self) -> list[ClassToken]:
        """Scan the full text and return the token list."""
        for pos, ch in enumerate(self._text):
            if self._depth > 0:
                self._scan_bracketed(pos, ch)
            elif ch.isspace():
                self._flush(pos)
            else:
                if self._start is None:
                    self._start = pos
                if ch == "[":
                    self._depth = 1

        self._flush(len(self._text))
        return self._tokens

    def _scan_bracketed(self, pos: int, ch: str) -> None:
        if self._quote is not None:
            self._quote = next_quote_state(self._text, pos, self._quote)
            return
        self._quote = next_quote_state(self._text, pos, None, VALUE_QUOTE_CHARS)
        if self._quote is not None:
            return
        if ch == "[":
            self._depth += 1
        elif ch == "]":
            self._depth -= 1

    def _flush(self, end: int) -> None:
        if self._start is not None:
            self._tokens.append(ClassToken(self._text[self._start : end], self._start))
            self._start = None


def split_tokens(text: str) -> list[ClassToken]:
    """Convenience function: tokenize class-string text."""
    return TokenScanner(text).scan()
