import re

from typing import Dict, Optional, Sequence

from ..config import Config

HISTORY_HEADER = "The user's recent shell history:"
REQUEST_HEADER = "Request:"

# ```bash\nls -la\n``` or ```ls -la```
_FENCED_BLOCK = re.compile(r"^```(?:[\w+-]*[ \t]*\n)?(.*?)\n?```$", re.DOTALL)
_REFUSAL = re.compile(r'^echo "Error: (.*)"$', re.DOTALL)


def build_prompt(system_prompt: str, history: Sequence[str], user_prompt: str) -> str:
    """
    Assembles the single user message sent to the model.

    The history section is left out entirely when there is no history.
    """
    sections = [system_prompt]
    if history:
        sections.append(HISTORY_HEADER + "\n" + "\n".join(history))
    sections.append(f"{REQUEST_HEADER} {user_prompt}")
    return "\n\n".join(sections)


def build_request(config: Config, prompt: str) -> Dict:
    return {
        "model": config.model,
        "max_tokens": config.max_tokens,
        "messages": [{"role": "user", "content": prompt}],
    }


def extract_command(text: str) -> str:
    """Trims the model's reply and strips any markdown fence around it."""
    command = text.strip()

    match = _FENCED_BLOCK.match(command)
    if match:
        command = match.group(1).strip()
    elif command.count("`") == 2 and command.startswith("`") and command.endswith("`"):
        command = command[1:-1].strip()

    return command


def refusal_reason(command: str) -> Optional[str]:
    """Returns the reason if the model replied with its `echo "Error: ..."` sigil."""
    match = _REFUSAL.match(command)
    return match.group(1) if match else None
