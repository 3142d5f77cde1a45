"""Custom exceptions for the PowerShell client."""

class PowerShellError(Exception):
    """Base exception for PowerShell command execution."""
    pass

class CommandNotFoundError(PowerShellError):
    """PowerShell executable could not be started."""
    pass

class CommandTimeoutError(PowerShellError):
    """Command did not finish within the configured timeout."""
    pass

class CommandFailedError(PowerShellError):
    """Command exited with a non-zero status."""
    def __init__(self, message: str, return_code: int = None, stderr: str = None):
        super().__init__(message)
        self.return_code = return_code
        self.stderr = stderr

class OutputDecodeError(PowerShellError):
    """Command output was not valid UTF-8."""
    pass
