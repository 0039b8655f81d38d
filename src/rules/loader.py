import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules

YAML_FENCE = re.compile(r"^[ \t]*```ya?ml[ \t]*\n(.*?)^[ \t]*```", re.MULTILINE | re.DOTALL)


def extract_yaml(text: str) -> str:
    """The first fenced ```yaml block of a markdown document, or the text itself."""
    match = YAML_FENCE.search(text)
    return match.group(1) if match else text


def load_rules(path: Path | str) -> Rules:
    """
    Load and validate the distributor rules file.

    The file is plain YAML or a markdown document carrying a fenced yaml block.
    Raises FileNotFoundError if the file is missing and ValueError if the
    YAML or the schema is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    try:
        data = yaml.safe_load(extract_yaml(path.read_text()))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file {path.name}: {e}") from e

    if data is None:
        raise ValueError(f"Rules file {path.name} is empty")
    if not isinstance(data, dict):
        raise ValueError("Rules file must contain a YAML mapping")

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
