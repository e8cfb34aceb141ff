"""
Pydantic models for romakana results.

These models give tokenizer output a serializable shape for the CLI and
for callers that hand results to JSON APIs.

Usage:
    from romakana import convert

    result = convert("kanji", {"IMEMode": True})
    print(result.model_dump_json())
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from romakana.tokenizer import Token


class TokenResult(BaseModel):
    """A single converted span."""
    start: int = Field(..., description="Start index in the input text")
    end: int = Field(..., description="End index (exclusive) in the input text")
    romaji: str = Field(..., description="Input text covered by this token, original casing")
    kana: Optional[str] = Field(None, description="Converted kana, or None while IME input is pending")

    @classmethod
    def from_token(cls, text: str, token: Token, output: Optional[str] = None) -> 'TokenResult':
        return cls(
            start=token.start,
            end=token.end,
            romaji=text[token.start:token.end],
            kana=output if output is not None else token.kana,
        )


class ConversionResult(BaseModel):
    """Full result of converting one input string."""
    input: str = Field(..., description="Original input text")
    text: str = Field(..., description="Converted output text")
    tokens: List[TokenResult] = Field(default_factory=list)
    complete: bool = Field(True, description="False if trailing IME input is still pending")

    @classmethod
    def from_tokens(cls, text: str, output: str, tokens: Sequence[Token],
                    outputs: Optional[Sequence[Optional[str]]] = None) -> 'ConversionResult':
        """
        Build a result from tokenizer output.

        Args:
            text: Original input.
            output: Converted text.
            tokens: Tokens from the tokenizer.
            outputs: Per-token output strings after script selection.
        """
        if outputs is None:
            outputs = [None] * len(tokens)
        return cls(
            input=text,
            text=output,
            tokens=[TokenResult.from_token(text, t, o) for t, o in zip(tokens, outputs)],
            complete=not (tokens and tokens[-1].pending),
        )
