from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class VersionsError(Exception):
    """base class for exceptions in pkgversions."""
    pass


class InputError(VersionsError):
    """raised when the query input does not satisfy the schema."""
    pass


class ConfigError(VersionsError):
    """raised when configuration values are missing or invalid."""
    pass


class MappingError(VersionsError):
    """raised when a registry response cannot be shaped into the schema."""
    pass


class RegistryError(VersionsError):
    """raised when the registry call fails for any reason."""
    def __init__(self, package: str, message: str, status_code: Optional[int] = None):
        self.package = package
        self.status_code = status_code
        super().__init__(message)

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    INPUT = "InputError"
    REMOTE = "RemoteError"
    MAPPING = "MappingError"
    CONFIG = "ConfigError"


class Diagnostic(BaseModel):
    """a structured, non-fatal report about a single failed operation."""
    model_config = ConfigDict(frozen=True)

    severity: Severity = Severity.ERROR
    kind: DiagnosticKind
    summary: str
    detail: str = ""
    params: str = ""  # e.g. "[package=bazelx]"

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.summary}"
        if self.params:
            text = f"{text} {self.params}"
        if self.detail:
            text = f"{text}: {self.detail}"
        return text


def error_to_diagnostic(
    err: BaseException,
    summary: str,
    kind: DiagnosticKind,
    params: str = "",
) -> Diagnostic:
    """wrap an exception into an error diagnostic, keeping the original message as detail."""
    return Diagnostic(
        kind=kind,
        summary=summary,
        detail=str(err) or type(err).__name__,
        params=params,
    )


def has_error(diagnostics) -> bool:
    return any(d.severity == Severity.ERROR for d in diagnostics)
