"""
Pydantic V2 models for the two-level Swagger-style discovery document.

The root index lists API groups; each group is described by a second
document listing operation groups, their operations and parameters.

Usage Example:
-------------

    from apidisco.discovery import DiscoveryRoot, GroupDocument

    root = DiscoveryRoot.model_validate({
        "apis": [{"path": "/users", "description": "User operations"}]
    })

    group = GroupDocument.model_validate({
        "apis": [{
            "path": "/users/{id}",
            "description": "A single user",
            "operations": [{
                "nickname": "GetUser",
                "method": "GET",
                "summary": "Fetch one user",
                "notes": "",
                "parameters": [{"name": "id", "paramType": "path", "required": True}]
            }]
        }]
    })

    for api in group.apis:
        for operation in api.operations:
            print(operation.method, api.path, operation.nickname)
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ParamType(str, Enum):
    """Where a parameter is transmitted in the HTTP request."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


class DiscoveryModel(BaseModel):
    """Base for discovery models: immutable, alias-aware, tolerant of extra keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
    )


# ============================================================================
# Root index
# ============================================================================


class GroupRef(DiscoveryModel):
    """Reference from the root index to one group document."""

    path: str = Field(..., description="Group path, appended to the discovery URL")
    description: str = Field("", description="Human readable group description")


class DiscoveryRoot(DiscoveryModel):
    """The root discovery document: an index of API groups."""

    apis: List[GroupRef] = Field(..., description="Groups exposed by the API")


# ============================================================================
# Group documents
# ============================================================================


class Parameter(DiscoveryModel):
    """A declared input of an operation."""

    name: str
    param_type: str = Field(..., alias="paramType")
    required: bool = False
    description: str | None = None

    @property
    def is_path(self) -> bool:
        return self.param_type == ParamType.PATH.value

    @property
    def is_query(self) -> bool:
        return self.param_type == ParamType.QUERY.value

    @property
    def is_body(self) -> bool:
        return self.param_type == ParamType.BODY.value


class Operation(DiscoveryModel):
    """One HTTP endpoint descriptor."""

    nickname: str
    method: str
    summary: str = ""
    notes: str = ""
    parameters: List[Parameter] = Field(default_factory=list)

    @property
    def path_parameters(self) -> list[Parameter]:
        """Declared path parameters, in declaration order."""
        return [param for param in self.parameters if param.is_path]

    @property
    def query_parameters(self) -> list[Parameter]:
        return [param for param in self.parameters if param.is_query]

    @property
    def body_parameters(self) -> list[Parameter]:
        return [param for param in self.parameters if param.is_body]


class OperationGroup(DiscoveryModel):
    """Operations sharing one path template."""

    path: str
    description: str = ""
    operations: List[Operation] = Field(default_factory=list)


class GroupDocument(DiscoveryModel):
    """A group's document, fetched from ``discovery_url + GroupRef.path``."""

    apis: List[OperationGroup] = Field(..., description="Path templates and their operations")
