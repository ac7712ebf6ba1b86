"""Secret report models decoded from engine responses.

Field aliases follow the engine's JSON keys (``ID``, ``Spec``, ...). Unknown
keys are ignored so newer engines can add fields without breaking decoding.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

_REPORT_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class SecretDriverSpec(BaseModel):
    """Secret storage driver and its options."""

    model_config = _REPORT_CONFIG

    name: str = Field(default="", alias="Name")
    options: dict[str, str] | None = Field(default=None, alias="Options")


class SecretSpec(BaseModel):
    """Creation attributes of a secret."""

    model_config = _REPORT_CONFIG

    name: str = Field(default="", alias="Name")
    driver: SecretDriverSpec = Field(default_factory=SecretDriverSpec, alias="Driver")
    labels: dict[str, str] | None = Field(default=None, alias="Labels")


class SecretInfoReport(BaseModel):
    """Description of one secret as reported by List and Inspect."""

    model_config = _REPORT_CONFIG

    id: str = Field(alias="ID")
    created_at: datetime | None = Field(default=None, alias="CreatedAt")
    updated_at: datetime | None = Field(default=None, alias="UpdatedAt")
    spec: SecretSpec = Field(default_factory=SecretSpec, alias="Spec")

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def driver(self) -> str:
        return self.spec.driver.name


class SecretCreateReport(BaseModel):
    """Result of a successful create."""

    model_config = _REPORT_CONFIG

    id: str = Field(alias="ID")
