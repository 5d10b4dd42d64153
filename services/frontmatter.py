"""Frontmatter block scanning, YAML decode/encode, and splicing back into documents."""

import yaml

from services.errors import FrontmatterNotFound

DELIMITER = "---"


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r\n") == DELIMITER


def find_block(content: str) -> tuple[int, int]:
    """Return (open_idx, close_idx) line indexes of the `---` delimiters.

    Raises FrontmatterNotFound if either delimiter is missing.
    """
    lines = content.splitlines(keepends=True)
    open_idx = next((i for i, line in enumerate(lines) if _is_delimiter(line)), None)
    if open_idx is None:
        raise FrontmatterNotFound("No opening '---' line")
    close_idx = next(
        (i for i in range(open_idx + 1, len(lines)) if _is_delimiter(lines[i])), None
    )
    if close_idx is None:
        raise FrontmatterNotFound("No closing '---' line")
    return open_idx, close_idx


def extract_block(content: str) -> str:
    """Encoded text between the two delimiters."""
    open_idx, close_idx = find_block(content)
    lines = content.splitlines(keepends=True)
    return "".join(lines[open_idx + 1 : close_idx])


def decode_block(text: str) -> dict:
    """Decode a block into a mapping. An empty block decodes as {}."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FrontmatterNotFound(f"Frontmatter is not valid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterNotFound(f"Frontmatter is not a mapping: {type(data).__name__}")
    return data


def encode_block(frontmatter: dict) -> str:
    """Encode a mapping as block-style YAML, key order preserved."""
    if not frontmatter:
        return ""
    return yaml.safe_dump(
        frontmatter,
        sort_keys=False,
        allow_unicode=True,
        width=1000,
        default_flow_style=False,
    )


def read_block(content: str) -> dict:
    return decode_block(extract_block(content))


def replace_block(content: str, frontmatter: dict) -> str:
    """Re-encode frontmatter in place of the existing block.

    Delimiter lines and everything outside the block are kept byte-for-byte;
    the block takes the opening delimiter's line ending.
    """
    open_idx, close_idx = find_block(content)
    lines = content.splitlines(keepends=True)
    block = encode_block(frontmatter)
    if lines[open_idx].endswith("\r\n"):
        block = block.replace("\n", "\r\n")
    return "".join(lines[: open_idx + 1]) + block + "".join(lines[close_idx:])

