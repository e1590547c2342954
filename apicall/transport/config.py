from pydantic import BaseModel, ConfigDict, Field


class ClientLimits(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    request_deadline_seconds: float = Field(default=30, gt=0)
    connect_timeout_seconds: float = Field(default=10, gt=0)
    tls_handshake_timeout_seconds: float = Field(default=10, gt=0)
    response_header_timeout_seconds: float = Field(default=10, gt=0)
    max_idle_connections: int = Field(default=100, ge=1)
    max_connections_per_host: int = Field(default=100, ge=1)
    max_idle_connections_per_host: int = Field(default=100, ge=1)

    @property
    def requests_timeout(self) -> tuple[float, float]:
        """``(connect, read)`` pair for ``requests``; urllib3 bounds the TLS handshake by the connect value."""
        connect = max(self.connect_timeout_seconds, self.tls_handshake_timeout_seconds)
        return connect, self.response_header_timeout_seconds
