from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str
    dependencies: dict[str, str] = Field(default_factory=dict)


class PersonalityOut(BaseModel):
    id: str
    name: str
    description: str


class ModelOption(BaseModel):
    id: str
    name: str
    provider: str
    is_free: bool = Field(serialization_alias="isFree")
