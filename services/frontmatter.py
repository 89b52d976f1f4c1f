"""Split a content file into its YAML front-matter and body."""

import yaml

from services.errors import SchemaError

_DELIMITER = "---"


def parse_frontmatter(content: str, source: str | None = None) -> tuple[dict, str]:
    """Extract YAML frontmatter and body from file content.

    Files without a front-matter block yield ({}, content); the schema then
    reports the missing fields. Malformed YAML or a non-mapping header raises
    SchemaError. The body is returned exactly as written after the closing
    delimiter line.
    """
    content = content.lstrip("\ufeff")
    if not content.startswith(_DELIMITER):
        return {}, content

    lines = content.split("\n")
    if lines[0].strip() != _DELIMITER:
        return {}, content

    end_idx = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == _DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        raise SchemaError(source, ["Front-matter block is not closed"])

    try:
        raw = yaml.safe_load("\n".join(line.rstrip("\r") for line in lines[1:end_idx]))
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises ValueError for out-of-range dates such as 2024-13-45
        raise SchemaError(source, [f"Front-matter is not valid YAML: {e}"]) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SchemaError(source, [f"Front-matter must be a mapping, got {type(raw).__name__}"])

    body_start = sum(len(line) + 1 for line in lines[: end_idx + 1])
    return raw, content[body_start:]
