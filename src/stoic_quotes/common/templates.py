"""Prompt templating helpers.

A template file holds a ``<|system|>`` section, sent as the system message, and
a ``<|user|>`` section containing ``{{input}}`` that wraps every prompt.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

LOGGER = logging.getLogger("stoic.templates")

DEFAULT_SYSTEM_PROMPT = (
    "You are a stoic philosopher. Generate profound, concise stoic wisdom in the "
    "style of Marcus Aurelius, Epictetus, and Seneca. Keep responses brief and impactful."
)
INPUT_PLACEHOLDER = "{{input}}"

SYSTEM_TAG = "<|system|>"
USER_TAG = "<|user|>"


@dataclass(frozen=True)
class ChatTemplate:
    """System message plus the user-message wrapper."""
    system: str = DEFAULT_SYSTEM_PROMPT
    user: str = INPUT_PLACEHOLDER

    def messages(self, prompt: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": render_prompt(self.user, prompt)},
        ]


DEFAULT_TEMPLATE = ChatTemplate()

def load_template(path: str = "configs/prompt_template.txt") -> str:
    """
    Load a prompt template file.

    Args:
        path: Path to template.
    """
    return Path(path).read_text(encoding="utf-8")

def render_prompt(template: str, user_input: str) -> str:
    """
    Render user input into the template.

    Args:
        template: Template content containing {{input}}.
        user_input: Input string.

    Returns:
        Rendered prompt.
    """
    return template.replace(INPUT_PLACEHOLDER, user_input)


def extract_system(template: str) -> str:
    """Extract system prompt between <|system|> and <|user|>; fallback to default."""
    if SYSTEM_TAG in template and USER_TAG in template:
        start = template.index(SYSTEM_TAG) + len(SYSTEM_TAG)
        try:
            end = template.index(USER_TAG, start)
        except ValueError:
            return DEFAULT_SYSTEM_PROMPT
        system = template[start:end].strip()
        if system:
            return system
    return DEFAULT_SYSTEM_PROMPT


def extract_user(template: str) -> str:
    """Extract the user wrapper after <|user|>; it must contain {{input}}."""
    if USER_TAG in template:
        user = template[template.index(USER_TAG) + len(USER_TAG):].strip()
        if INPUT_PLACEHOLDER in user:
            return user
    return INPUT_PLACEHOLDER


def parse_template(template: str) -> ChatTemplate:
    return ChatTemplate(system=extract_system(template), user=extract_user(template))


def load_chat_template(path: str) -> ChatTemplate:
    """
    Read a chat template file.

    Missing or malformed templates are logged and replaced by the built-in prompt.

    Args:
        path: Path to template.
    """
    try:
        template = load_template(path)
    except OSError as e:
        LOGGER.warning("Failed to read prompt template %s: %s", path, e)
        return DEFAULT_TEMPLATE
    has_sys = SYSTEM_TAG in template
    has_user = USER_TAG in template
    if not (has_sys and has_user):
        LOGGER.warning(
            "Prompt template missing expected tags; found system=%s user=%s",
            has_sys,
            has_user,
        )
    return parse_template(template)
