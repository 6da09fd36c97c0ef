from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, Union

from ..cancellation import CancellationToken
from ..config.constants import DEFAULT_RETRY, DEFAULT_RETRY_DELAY


class ClientConfig(BaseModel):
    """
    Base configuration for the underlying ``httpx.AsyncClient``.

    Values not set here fall back to ``DEFAULT_CLIENT_CONFIG``.
    """
    base_url: Optional[str] = Field(None, description="Base URL prepended to relative request URLs")
    timeout: Optional[float] = Field(None, ge=0.0, description="Default timeout for non-streaming requests (seconds)")
    headers: Optional[Dict[str, str]] = Field(None, description="Headers sent with every request")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters sent with every request")
    follow_redirects: Optional[bool] = Field(None, description="Follow HTTP redirects")

    class Config:
        extra = "allow"  # Passed through to httpx.AsyncClient


class StreamRequestConfig(BaseModel):
    """
    Configuration for a single streaming request.

    Extends the base request fields with cancellation and retry settings.
    Timeouts are not configurable here: streaming requests always wait
    without a bound.
    """
    # Base request fields
    url: str = Field(..., description="Absolute URL or path relative to the client's base_url")
    method: str = Field(default="GET", description="HTTP method")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    headers: Optional[Dict[str, str]] = Field(None, description="Request headers")
    json_body: Optional[Any] = Field(None, alias="json", description="JSON request body")
    content: Optional[Union[str, bytes]] = Field(None, description="Raw request body")
    data: Optional[Dict[str, Any]] = Field(None, description="Form-encoded request body")

    # Streaming extensions
    signal: Optional[CancellationToken] = Field(None, description="External cancellation signal")
    retry: int = Field(default=DEFAULT_RETRY, ge=0, description="Retry attempts for issue-time failures")
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, ge=0.0, description="Delay between attempts (seconds)")
    retry_on_read_error: bool = Field(
        default=False,
        description="Also retry failures that happen after reading started (chunks are not replayed)"
    )

    class Config:
        arbitrary_types_allowed = True
        populate_by_name = True

    def request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.build_request``."""
        kwargs: Dict[str, Any] = {}
        if self.params is not None:
            kwargs["params"] = self.params
        if self.headers is not None:
            kwargs["headers"] = self.headers
        if self.json_body is not None:
            kwargs["json"] = self.json_body
        if self.content is not None:
            kwargs["content"] = self.content
        if self.data is not None:
            kwargs["data"] = self.data
        return kwargs
