"""
Error types for the Cayley SDK
"""

from typing import Optional, Union
import json


class CayleyError(Exception):
    """
    Base exception for all Cayley SDK errors.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ============================================================================
# Transport errors
# ============================================================================

class InvalidUrlError(CayleyError):
    """Endpoint string does not parse as a valid connection target"""
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Invalid URL {url!r}: {reason}")


class MalformedRequestError(CayleyError):
    """A request object could not be built for an otherwise valid URL"""
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Malformed request to {url!r}: {reason}")


class RequestFailedError(CayleyError):
    """I/O failure while sending a query or reading its response"""
    def __init__(self, query: str, reason: str):
        self.query = query
        super().__init__(f"Request failed: {reason} (query: {query})")


# ============================================================================
# Response errors
# ============================================================================

class ResponseParseError(CayleyError):
    """Response bytes are not decodable text"""
    def __init__(self, message: str):
        super().__init__(f"Response parse error: {message}")


class DecodingError(CayleyError):
    """Response text is not a valid result envelope"""
    def __init__(self, message: str, text: str, cause: Optional[Exception] = None):
        self.text = text
        self.cause = cause
        super().__init__(f"Decoding error: {message}")

    @classmethod
    def from_json_error(cls, error: json.JSONDecodeError, text: str) -> "DecodingError":
        """Create DecodingError from json.JSONDecodeError"""
        return cls(f"JSON error: {error.msg} at line {error.lineno}, column {error.colno}",
                   text, error)


class SerializationError(CayleyError):
    """Deserialization of rows into user types failed"""
    def __init__(self, message: str):
        super().__init__(f"Serialization error: {message}")


# ============================================================================
# Query errors
# ============================================================================

class QueryNotFinalizedError(CayleyError):
    """Attempt to execute a path that never reached the finalized state"""
    def __init__(self, message: str = "query must be finalized before execution"):
        super().__init__(f"Query not finalized: {message}")


class QueryCompilationError(CayleyError):
    """A path could not be rendered to query text"""
    def __init__(self, message: str):
        super().__init__(f"Query compilation failed: {message}")


class PathFinalizedError(CayleyError):
    """Mutation of a path after a terminal operation"""
    def __init__(self, segment: str):
        self.segment = segment
        super().__init__(f"Path already finalized, cannot append {segment}")


class ReusableCannotBeSavedError(CayleyError):
    """A morphism's body failed to compile when a save was attempted"""
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"Morphism {name!r} cannot be saved: {reason}")


class MorphismNotSavedError(CayleyError):
    """A query follows a morphism that was never saved to the store"""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Morphism {name!r} is followed but was never saved")


# ============================================================================
# Error Conversion Helpers
# ============================================================================

def from_bytes(source: Union[str, bytes]) -> str:
    """
    Decode response bytes as UTF-8, raising ResponseParseError on failure.
    """
    if isinstance(source, str):
        return source
    try:
        return source.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ResponseParseError(f"response is not valid UTF-8 ({e.reason} at byte {e.start})") from e
