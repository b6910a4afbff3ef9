from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class GraphQLError(BaseModel):
    """One entry of the ``errors`` list of a GraphQL response."""

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )
    message: str
    locations: Optional[List[Dict[str, Any]]] = Field(default=None)
    path: Optional[List[Union[str, int]]] = Field(default=None)
    extensions: Optional[Dict[str, Any]] = Field(default=None)


class GraphQLResponse(BaseModel, Generic[T]):
    """Envelope of every GraphQL response.

    ``data`` is typed by the caller: ``GraphQLResponse[MyModel]`` validates the
    data slot as ``MyModel`` while the error list keeps a fixed shape.
    """

    model_config = ConfigDict(extra="allow")

    data: Optional[T] = None
    errors: List[GraphQLError] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        return [] if value is None else value
