"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List

from career_outlooks.matching.expander import CREDENTIAL_SYNONYMS


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration dict for settings that are legal but suspicious.

    Args:
        config_dict: Raw configuration dictionary (before pydantic validation)

    Returns:
        List of warning messages
    """
    warning_messages = []

    matching = config_dict.get("matching", {})
    if not isinstance(matching, dict):
        return warning_messages

    credential_synonyms = matching.get("credential_synonyms", {})
    if isinstance(credential_synonyms, dict):
        for label, synonyms in credential_synonyms.items():
            if not isinstance(label, str):
                continue
            key = label.strip().lower()
            if key not in CREDENTIAL_SYNONYMS:
                warning_messages.append(
                    f"matching.credential_synonyms adds unknown credential '{key}'"
                )
            if isinstance(synonyms, list):
                normalized = [s.strip().lower() for s in synonyms if isinstance(s, str)]
                duplicates = sorted({s for s in normalized if normalized.count(s) > 1})
                if duplicates:
                    warning_messages.append(
                        f"Duplicate synonyms for credential '{key}': {', '.join(duplicates)}"
                    )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
