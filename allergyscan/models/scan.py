"""Match and rendering data models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MatchSpan(BaseModel):
    """One located occurrence of a term in a document.

    The range is half-open: ``document[start:end]`` is the matched text.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, description="Offset of the first matched character")
    end: int = Field(ge=0, description="Offset one past the last matched character")
    term: str = Field(description="The configured term that produced this match")
    text: str = Field(default="", description="Matched text with the document's own casing")

    @model_validator(mode="after")
    def check_range(self) -> "MatchSpan":
        """Reject inverted ranges."""
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must not be before start ({self.start})")
        return self

    @property
    def length(self) -> int:
        """Number of matched characters."""
        return self.end - self.start

    def rebased(self, origin: int, length: int) -> "MatchSpan":
        """Return the span relative to ``origin``, clipped to ``[0, length]``.

        Used to express a document span in line coordinates. A span that runs
        past the end of the line is cut at the line end.
        """
        start = min(max(self.start - origin, 0), length)
        end = min(max(self.end - origin, start), length)
        return MatchSpan(start=start, end=end, term=self.term, text=self.text)


class StyledRun(BaseModel):
    """A piece of a line with a single highlight state."""

    model_config = ConfigDict(frozen=True)

    text: str
    highlighted: bool = False
