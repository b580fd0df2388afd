"""Prompt management module.

Externalizes prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

CATALOG_BLOCK_START = "--- CATALOG DATA ---"
CATALOG_BLOCK_END = "--- END OF CATALOG DATA ---"

GROUNDING_SENTENCE = (
    "You should primarily base your recommendations and answers "
    "on the following catalog data."
)


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: reelchat/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content, without trailing whitespace

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").rstrip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").rstrip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def get_system_prompt() -> str:
    """Get the refusal-and-scope policy used as the base instruction."""
    return load_prompt("system")


def build_system_instruction(context: str, base_prompt: str | None = None) -> str:
    """Combine the scope policy with optional grounding context.

    Args:
        context: Serialized catalog entries from the context selector ("" for none)
        base_prompt: Policy text (None loads the packaged system prompt)

    Returns:
        The base prompt alone when context is empty, otherwise the base prompt
        followed by a labeled catalog data block
    """
    base = get_system_prompt() if base_prompt is None else base_prompt
    if not context:
        return base

    return (
        f"{base} {GROUNDING_SENTENCE}\n"
        f"{CATALOG_BLOCK_START}\n"
        f"{context}\n"
        f"{CATALOG_BLOCK_END}\n"
    )


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "CATALOG_BLOCK_END",
    "CATALOG_BLOCK_START",
    "build_system_instruction",
    "clear_cache",
    "get_system_prompt",
    "load_prompt",
]
