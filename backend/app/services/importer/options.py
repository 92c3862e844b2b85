"""Option synthesis for choice-type questions."""

import re
import uuid

_WHITESPACE_RUN = re.compile(r"\s+")


def option_value(label: str) -> str:
    """``"Tamil Nadu"`` -> ``"tamil_nadu"``."""
    return _WHITESPACE_RUN.sub("_", label.lower())


class OptionSynthesizer:
    """Turn a comma-separated options cell into ``{id, label, value}`` records.

    Ids are ``opt_<token>_<index>`` where the token is fresh per call, so ids
    stay unique across every question of a batch. Empty tokens are dropped.
    Duplicate labels are kept as-is.
    """

    def __init__(self, separator: str = ","):
        self.separator = separator

    def new_token(self) -> str:
        return uuid.uuid4().hex[:12]

    def synthesize(self, raw: str) -> list[dict[str, str]]:
        token = self.new_token()
        labels = [part.strip() for part in raw.split(self.separator)]
        return [
            {
                "id": f"opt_{token}_{index}",
                "label": label,
                "value": option_value(label),
            }
            for index, label in enumerate(label for label in labels if label)
        ]
