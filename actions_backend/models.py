from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Headers every action response carries, errors and OPTIONS included
ACTIONS_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, Content-Encoding, Accept-Encoding",
}


class ActionParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    label: Optional[str] = None
    required: bool = False


class LinkedAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    href: str
    parameters: Optional[List[ActionParameter]] = None


class ActionLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    actions: List[LinkedAction]


class ActionGetResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    icon: str
    description: str
    label: str
    links: Optional[ActionLinks] = None


class ActionPostRequest(BaseModel):
    account: str

    @field_validator('account')
    @classmethod
    def validate_account(cls, v):
        if not v.strip():
            raise ValueError('account must not be empty')
        return v


class ActionPostResponse(BaseModel):
    transaction: str
    message: Optional[str] = None


class ActionRule(BaseModel):
    path_pattern: str = Field(serialization_alias="pathPattern")
    api_path: str = Field(serialization_alias="apiPath")


class ActionsJson(BaseModel):
    rules: List[ActionRule]
