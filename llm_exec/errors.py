"""
Error kinds surfaced to the user by `llm-exec`.

Every error carries the exit code the CLI terminates with, so the front-end
can report any of them the same way.
"""

from typing import Optional


class LlmExecError(Exception):
    exit_code = 1


class ConfigError(LlmExecError):
    """The config file exists but could not be read or parsed."""

    exit_code = 2

    def __init__(self, path: str, problem: str):
        super().__init__(f"Could not read or parse config file '{path}': {problem}")
        self.path = path
        self.problem = problem


class MissingCredentialsError(LlmExecError):
    exit_code = 3

    def __init__(self, env_var: str):
        super().__init__(f"{env_var} environment variable not set")
        self.env_var = env_var


class ApiError(LlmExecError):
    """Non-2xx response, timeout or transport failure talking to the LLM API."""

    exit_code = 4

    def __init__(self, message: str, status_code: Optional[int] = None):
        if status_code is not None:
            super().__init__(f"API error ({status_code}): {message}")
        else:
            super().__init__(f"API error: {message}")
        self.status_code = status_code
        self.message = message


class EmptyResponseError(LlmExecError):
    exit_code = 5

    def __init__(self, message: str = "No response from the model"):
        super().__init__(message)


class ExecutionError(LlmExecError):
    """The suggested command could not be launched at all."""

    exit_code = 6

    def __init__(self, shell: str, reason: str):
        super().__init__(f"Could not run command with shell '{shell}': {reason}")
        self.shell = shell


class RefusalError(LlmExecError):
    """The model answered with its `echo "Error: ..."` sigil instead of a command."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
