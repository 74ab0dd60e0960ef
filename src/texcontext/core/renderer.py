"""Placeholder substitution producing the final LaTeX file set."""

from __future__ import annotations

from dataclasses import dataclass
import re

from .models import MAIN_FILE, Context, DocumentPayload, RenderedOutput


@dataclass(frozen=True, slots=True)
class PlaceholderTokens:
    """Literal markers replaced by the payload fields."""

    title: str = r"\TITLE"
    abstract: str = r"\ABSTRACT"
    body: str = r"\CONTENT"

    def __post_init__(self) -> None:
        tokens = (self.title, self.abstract, self.body)
        if any(not token for token in tokens):
            raise ValueError("Placeholder tokens must be non-empty.")
        if len(set(tokens)) != len(tokens):
            raise ValueError("Placeholder tokens must be distinct.")

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.title, self.abstract, self.body)


DEFAULT_TOKENS = PlaceholderTokens()


class Renderer:
    """Render a :class:`Context` into a :class:`RenderedOutput`.

    Tokens are matched literally and replaced in a single pass, so payload text
    that happens to contain a token is inserted as-is rather than substituted
    again. Payload text is not escaped for LaTeX.
    """

    def __init__(self, tokens: PlaceholderTokens = DEFAULT_TOKENS) -> None:
        self.tokens = tokens
        # Longest first so a token that prefixes another never shadows it.
        ordered = sorted(tokens.as_tuple(), key=len, reverse=True)
        self._pattern = re.compile("|".join(re.escape(token) for token in ordered))

    def substitute(self, template: str, doc: DocumentPayload) -> str:
        """Return ``template`` with every placeholder replaced by ``doc`` fields."""
        values = {
            self.tokens.title: doc.title,
            self.tokens.abstract: doc.abstract,
            self.tokens.body: doc.body,
        }
        return self._pattern.sub(lambda match: values[match.group(0)], template)

    def render(self, context: Context, doc: DocumentPayload) -> RenderedOutput:
        main_content = self.substitute(context.template, doc).encode("utf-8")
        files = {**context.files, MAIN_FILE: main_content}
        return RenderedOutput(title=doc.title, files=files)


_DEFAULT_RENDERER = Renderer()


def render(context: Context, doc: DocumentPayload) -> RenderedOutput:
    """Render ``context`` with the standard placeholder tokens."""
    return _DEFAULT_RENDERER.render(context, doc)


__all__ = ["DEFAULT_TOKENS", "PlaceholderTokens", "Renderer", "render"]
