from ..config import Config
from ..errors import EmptyResponseError, RefusalError
from .llm import LLMClient
from .prompt import build_request, extract_command, refusal_reason


def suggest_command(client: LLMClient, config: Config, prompt: str) -> str:
    """
    Asks the model for a single shell command and returns it ready to run.

    Raises:
        EmptyResponseError: The reply has no usable text.
        RefusalError: The model said it cannot help.
    """
    response = client.completion(build_request(config, prompt))

    text = response.first_text
    if text is None:
        raise EmptyResponseError()

    command = extract_command(text)
    if not command:
        raise EmptyResponseError("The model returned an empty command")

    reason = refusal_reason(command)
    if reason is not None:
        raise RefusalError(reason)

    return command
