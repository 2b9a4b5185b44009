from .error_handler import (
    EmptyInputError,
    ExchangeFailure,
    InputFormatError,
    KiroTokenError,
    MissingCredentialError,
    UpstreamExchangeError,
)
from .flow_selector import select_flow
from .input_parser import parse_input
from .pipeline import KiroTokenPipeline, process_credentials
from .types import (
    AuthFlow,
    CanonicalTokenRecord,
    ClientSecretArtifact,
    FlowSelection,
    ParsedCredential,
    ProcessResult,
    TokenExchangeResult,
    UsageSnapshot,
)

__all__ = [
    "KiroTokenPipeline",
    "process_credentials",
    "parse_input",
    "select_flow",
    # Data model
    "AuthFlow",
    "CanonicalTokenRecord",
    "ClientSecretArtifact",
    "FlowSelection",
    "ParsedCredential",
    "ProcessResult",
    "TokenExchangeResult",
    "UsageSnapshot",
    # Errors
    "KiroTokenError",
    "InputFormatError",
    "EmptyInputError",
    "MissingCredentialError",
    "ExchangeFailure",
    "UpstreamExchangeError",
]
