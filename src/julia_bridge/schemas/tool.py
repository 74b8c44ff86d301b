from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(..., alias="inputSchema", description="JSON-schema of the arguments")


class ToolCall(BaseModel):
    name: str = Field(..., description="Tool name")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], is_error=is_error)
