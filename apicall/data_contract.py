from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status_code: int = Field(ge=100)
    reason: str | None = None
    url: str = Field(min_length=1)
    content: bytes = b""
    content_type: str | None = None
    elapsed_seconds: float = Field(default=0.0, ge=0)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
