"""Content blocks returned by block-based providers."""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Union


@dataclass(frozen=True)
class TextBlock:
    text: str


@dataclass(frozen=True)
class OtherBlock:
    """Any non-text block (images, tool use, thinking, ...)."""

    kind: str


ContentBlock = Union[TextBlock, OtherBlock]


def _field(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def to_content_block(raw: Any) -> ContentBlock:
    """
    Convert one raw SDK block (object or dict) into a tagged block.

    Raises:
        ValueError: If the block has no kind, or a text block has no string text
    """
    kind = _field(raw, "type")
    if not isinstance(kind, str) or not kind:
        raise ValueError(f"content block without a type: {raw!r}")

    if kind == "text":
        text = _field(raw, "text")
        if not isinstance(text, str):
            raise ValueError("text block without string text")
        return TextBlock(text=text)

    return OtherBlock(kind=kind)


def join_text_blocks(blocks: Iterable[ContentBlock]) -> str:
    """Concatenate text blocks in order, skip every other kind, trim the result."""
    parts: List[str] = []
    for block in blocks:
        if isinstance(block, TextBlock):
            parts.append(block.text)
        elif isinstance(block, OtherBlock):
            continue
        else:
            raise TypeError(f"not a content block: {block!r}")
    return "".join(parts).strip()
