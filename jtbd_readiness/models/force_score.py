from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional


class ForceScoreRecord(BaseModel):
    """
    One analysed survey response as delivered by the LLM scoring call.

    Field aliases follow the scoring call's camelCase output; snake_case
    names are accepted as well. The force labels are left untyped here so an
    unknown or missing primary force can be reported as InvalidForceKind rather than
    a generic validation failure.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    primary_force: Any = Field(
        default=None,
        alias="primaryJtbdForce",
        description="Primary JTBD force label"
    )

    secondary_forces: List[Any] = Field(
        default_factory=list,
        alias="secondaryJtbdForces",
        description="Other forces expressed by the response"
    )

    force_strength_score: float = Field(
        ...,
        alias="forceStrengthScore",
        allow_inf_nan=False,
        description="How strongly the primary force is expressed (0-5 or 0-10)"
    )

    confidence_score: float = Field(
        default=0.0,
        alias="confidenceScore",
        allow_inf_nan=False,
        description="Model confidence in the labelling (0-5)"
    )

    key_themes: List[str] = Field(
        default_factory=list,
        alias="keyThemes",
        description="Themes in extraction order"
    )

    response_id: Optional[str] = Field(
        default=None,
        alias="responseId",
        description="Upstream survey response identifier, if supplied"
    )

    @field_validator("secondary_forces", "key_themes", mode="before")
    @classmethod
    def null_list_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("confidence_score", mode="before")
    @classmethod
    def null_confidence_to_zero(cls, v):
        return 0.0 if v is None else v

    @field_validator("response_id", mode="before")
    @classmethod
    def response_id_to_str(cls, v):
        """Upstream ids arrive as strings or integers."""
        if v is None or isinstance(v, str):
            return v
        return str(v)
